"""
Pre-order tree serialization.

  internal -> '0', left subtree, right subtree
  leaf     -> '1', symbol codepoint as SYMBOL_BITS bits (MSB-first)

Both directions use an explicit stack; a hostile container can describe a
chain tens of thousands of levels deep.
"""
from __future__ import annotations
from typing import Tuple

from bitpack import BitWriter, BitReader
from errors import CorruptTree, UnsupportedSymbol
from huffman import Internal, Leaf, Node

SYMBOL_BITS = 16
SYMBOL_MAX = (1 << SYMBOL_BITS) - 1


def serialize_tree(root: Node) -> Tuple[bytes, int]:
    """Return (packed tree bytes, tree length in bits)."""
    bw = BitWriter()
    stack = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            cp = ord(node.symbol)
            if cp > SYMBOL_MAX:
                raise UnsupportedSymbol(
                    f"Symbol U+{cp:04X} does not fit in {SYMBOL_BITS} bits"
                )
            bw.write_bit(1)
            bw.write_code(cp, SYMBOL_BITS)
        else:
            bw.write_bit(0)
            stack.append(node.right)
            stack.append(node.left)
    nbits = bw.length
    return bw.finish(), nbits


def deserialize_tree(data: bytes, nbits: int) -> Node:
    """Rebuild a tree from exactly nbits of data; leftovers are an error."""
    try:
        br = BitReader(data, nbits)
    except EOFError as e:
        raise CorruptTree(f"Tree section shorter than {nbits} bits") from e

    seen = set()
    pending = []  # children collected so far for each open internal node
    root = None
    try:
        while root is None:
            if br.read_bit() == 0:
                pending.append([])
                continue
            sym = chr(br.read_code(SYMBOL_BITS))
            if sym in seen:
                raise CorruptTree(f"Symbol U+{ord(sym):04X} appears in more than one leaf")
            seen.add(sym)
            node = Leaf(sym)
            # close every internal node that now has both children
            while True:
                if not pending:
                    root = node
                    break
                pending[-1].append(node)
                if len(pending[-1]) < 2:
                    break
                left, right = pending.pop()
                node = Internal(left, right)
    except EOFError as e:
        raise CorruptTree(f"Tree bitstream exhausted after {br.pos} of {nbits} bits") from e

    if br.remaining:
        raise CorruptTree(f"{br.remaining} trailing bits after a complete tree")
    return root


def check_symbols(text: str):
    """Fail on the first codepoint the leaf field cannot hold."""
    if not text or ord(max(text)) <= SYMBOL_MAX:
        return
    for i, ch in enumerate(text):
        if ord(ch) > SYMBOL_MAX:
            raise UnsupportedSymbol(
                f"Symbol U+{ord(ch):04X} at position {i} does not fit in {SYMBOL_BITS} bits"
            )
