from __future__ import annotations
import heapq
import itertools
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Union

import numpy as np

from bitpack import str_to_bits
from errors import TruncatedStream, UnknownSymbol


@dataclass(frozen=True)
class Leaf:
    symbol: str
    weight: int = 0


@dataclass(frozen=True)
class Internal:
    left: "Node"
    right: "Node"
    weight: int = 0


Node = Union[Leaf, Internal]


def count_frequencies(text: str) -> Counter:
    """Symbol -> occurrence count, in first-seen order."""
    return Counter(text)


def build_tree(freqs: Dict[str, int]) -> Node:
    """
    Greedy two-minimum merge with a heap.

    Leaves are queued in (weight, codepoint) order and every node gets a
    running sequence number, so equal weights pop in insertion order and the
    shape depends on the frequency table alone. A single symbol yields a bare
    Leaf as root.
    """
    if not freqs:
        raise ValueError("Cannot build a tree from an empty frequency table")
    counter = itertools.count()
    pq = [(f, next(counter), Leaf(sym, f))
          for sym, f in sorted(freqs.items(), key=lambda kv: (kv[1], ord(kv[0])))]
    heapq.heapify(pq)
    while len(pq) > 1:
        fa, _, a = heapq.heappop(pq)
        fb, _, b = heapq.heappop(pq)
        heapq.heappush(pq, (fa + fb, next(counter), Internal(a, b, fa + fb)))
    return pq[0][2]


def build_codebook(root: Node) -> Dict[str, str]:
    """Symbol -> code ('0'/'1' string); left edge 0, right edge 1."""
    if isinstance(root, Leaf):
        # lone symbol still needs one bit per occurrence
        return {root.symbol: "0"}
    codes: Dict[str, str] = {}
    stack = [(root, "")]
    while stack:
        node, prefix = stack.pop()
        if isinstance(node, Leaf):
            codes[node.symbol] = prefix
        else:
            stack.append((node.right, prefix + "1"))
            stack.append((node.left, prefix + "0"))
    return codes


def encode_symbols(text: str, codes: Dict[str, str]) -> np.ndarray:
    parts = []
    for i, ch in enumerate(text):
        code = codes.get(ch)
        if code is None:
            raise UnknownSymbol(f"No code for symbol U+{ord(ch):04X} at position {i}")
        parts.append(code)
    return str_to_bits("".join(parts))


def decode_bits(bits01: np.ndarray, root: Node) -> str:
    """
    Walk the tree bit by bit, emitting a symbol at every leaf.
    The last bit must land on a leaf.
    """
    bits = np.asarray(bits01).tolist()
    if isinstance(root, Leaf):
        return root.symbol * len(bits)

    out = []
    cur = root
    for bit in bits:
        cur = cur.right if bit else cur.left
        if isinstance(cur, Leaf):
            out.append(cur.symbol)
            cur = root
    if cur is not root:
        raise TruncatedStream(f"Encoded data ends mid-code after {len(out)} symbols")
    return "".join(out)


def tree_depth(root: Node) -> int:
    depth = 0
    stack = [(root, 0)]
    while stack:
        node, d = stack.pop()
        if isinstance(node, Internal):
            stack.append((node.left, d + 1))
            stack.append((node.right, d + 1))
        else:
            depth = max(depth, d)
    return depth


def leaf_symbols(root: Node):
    """Leaf symbols in left-to-right order."""
    out = []
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            out.append(node.symbol)
        else:
            stack.append(node.right)
            stack.append(node.left)
    return out
