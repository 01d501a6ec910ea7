from __future__ import annotations
import io
import struct
from dataclasses import dataclass
from typing import Optional

import numpy as np

from bitpack import pack_bits, packed_size, unpack_bits
from errors import CorruptContainer, FilenameTooLong
from huffman import Node
from integrity import DIGEST_SIZE, digest
from treecodec import deserialize_tree, serialize_tree

# Container layout (big-endian, unsigned):
# name_len(u8) name(name_len)
# tree_bits(u32) tree(ceil(tree_bits/8))
# data_bits(u32) data(ceil(data_bits/8))
# symbol_count(u32) digest(32)
U8_FMT = ">B"
U32_FMT = ">I"
U32_MAX = 0xFFFFFFFF
FILENAME_MAX = 255


@dataclass
class Container:
    filename: str
    tree: Optional[Node]
    tree_bits: int
    data_bits: np.ndarray
    symbol_count: int
    digest: bytes


def encode_filename(filename: str) -> bytes:
    name = filename.encode("utf-8")
    if len(name) > FILENAME_MAX:
        raise FilenameTooLong(
            f"Filename is {len(name)} bytes, the container allows {FILENAME_MAX}"
        )
    return name


def _check_u32(value: int, what: str):
    if not (0 <= value <= U32_MAX):
        raise ValueError(f"{what} out of u32 range: {value}")


def write_container(f, *, filename: str, text: str, tree: Optional[Node], data_bits: np.ndarray):
    name = encode_filename(filename)
    if tree is None:
        tree_bytes, tree_nbits = b"", 0
    else:
        tree_bytes, tree_nbits = serialize_tree(tree)
    data_nbits = int(np.asarray(data_bits).size)
    _check_u32(tree_nbits, "tree length")
    _check_u32(data_nbits, "data length")
    _check_u32(len(text), "symbol count")

    f.write(struct.pack(U8_FMT, len(name)))
    f.write(name)
    f.write(struct.pack(U32_FMT, tree_nbits))
    f.write(tree_bytes)
    f.write(struct.pack(U32_FMT, data_nbits))
    f.write(pack_bits(data_bits))
    f.write(struct.pack(U32_FMT, len(text)))
    f.write(digest(text))


def pack_container(*, filename: str, text: str, tree: Optional[Node], data_bits: np.ndarray) -> bytes:
    """Build the whole container in memory; nothing is returned on failure."""
    buf = io.BytesIO()
    write_container(buf, filename=filename, text=text, tree=tree, data_bits=data_bits)
    return buf.getvalue()


def _read_exact(f, n: int, what: str) -> bytes:
    data = f.read(n)
    if len(data) != n:
        raise CorruptContainer(f"Malformed container: {what} truncated ({len(data)}/{n} bytes)")
    return data


def _read_u32(f, what: str) -> int:
    return struct.unpack(U32_FMT, _read_exact(f, 4, what))[0]


def _read_bits_section(f, nbits: int, what: str) -> bytes:
    data = _read_exact(f, packed_size(nbits), what)
    tail = nbits % 8
    if tail and data[-1] & ((1 << (8 - tail)) - 1):
        raise CorruptContainer(f"Malformed container: nonzero padding in {what}")
    return data


def read_container(f) -> Container:
    (name_len,) = struct.unpack(U8_FMT, _read_exact(f, 1, "filename length"))
    name = _read_exact(f, name_len, "filename")
    try:
        filename = name.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CorruptContainer("Malformed container: filename is not UTF-8") from e

    tree_nbits = _read_u32(f, "tree length")
    tree_bytes = _read_bits_section(f, tree_nbits, "tree")
    data_nbits = _read_u32(f, "data length")
    data_bytes = _read_bits_section(f, data_nbits, "encoded data")
    symbol_count = _read_u32(f, "symbol count")
    stored_digest = _read_exact(f, DIGEST_SIZE, "digest")
    if f.read(1):
        raise CorruptContainer("Malformed container: trailing bytes after digest")

    tree = deserialize_tree(tree_bytes, tree_nbits) if tree_nbits else None
    return Container(
        filename=filename,
        tree=tree,
        tree_bits=tree_nbits,
        data_bits=unpack_bits(data_bytes, data_nbits),
        symbol_count=symbol_count,
        digest=stored_digest,
    )


def unpack_container(data: bytes) -> Container:
    return read_container(io.BytesIO(data))
