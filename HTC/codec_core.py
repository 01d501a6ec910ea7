from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

import numpy as np

from bitstream import encode_filename, pack_container, unpack_container
from errors import CorruptTree, IntegrityMismatch
from huffman import build_codebook, build_tree, count_frequencies, decode_bits, encode_symbols
from integrity import verify
from treecodec import check_symbols


@dataclass
class DecodeResult:
    filename: str
    text: str
    verified: bool
    original_symbol_count: int
    decoded_symbol_count: int
    digest_match: bool
    count_match: bool
    digest: bytes
    reasons: List[str] = field(default_factory=list)

    def require_verified(self):
        if not self.verified:
            raise IntegrityMismatch(f"{self.filename}: " + "; ".join(self.reasons))
        return self


def compress(text: str, filename: str) -> bytes:
    """
    Huffman-compress text into a container.
    Raises FilenameTooLong or UnsupportedSymbol; no bytes are produced on failure.
    """
    encode_filename(filename)
    check_symbols(text)
    if not text:
        return pack_container(filename=filename, text=text, tree=None,
                              data_bits=np.zeros(0, dtype=np.uint8))
    tree = build_tree(count_frequencies(text))
    codes = build_codebook(tree)
    data_bits = encode_symbols(text, codes)
    return pack_container(filename=filename, text=text, tree=tree, data_bits=data_bits)


def decompress(data: bytes) -> DecodeResult:
    """
    Parse a container, decode its text and check it against the stored
    digest and symbol count. Structural damage raises CorruptContainer,
    CorruptTree or TruncatedStream; an integrity mismatch only clears
    `verified`.
    """
    c = unpack_container(data)
    if c.tree is None:
        if c.data_bits.size:
            raise CorruptTree("Encoded data present but the tree section is empty")
        text = ""
    else:
        text = decode_bits(c.data_bits, c.tree)

    v = verify(text, c.digest, c.symbol_count)
    return DecodeResult(
        filename=c.filename,
        text=text,
        verified=v.verified,
        original_symbol_count=c.symbol_count,
        decoded_symbol_count=len(text),
        digest_match=v.digest_match,
        count_match=v.count_match,
        digest=c.digest,
        reasons=v.reasons,
    )


def decompress_file(src: str) -> DecodeResult:
    with open(src, "rb") as f:
        return decompress(f.read())
