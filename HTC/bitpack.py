from typing import Optional

import numpy as np


class BitWriter:
    def __init__(self):
        self._buf = bytearray()
        self._cur = 0
        self._nbits = 0  # bits currently in _cur (0..7)
        self.length = 0  # total bits written

    def write_bit(self, bit: int):
        self._cur = (self._cur << 1) | (bit & 1)
        self._nbits += 1
        self.length += 1
        if self._nbits == 8:
            self._buf.append(self._cur)
            self._cur = 0
            self._nbits = 0

    def write_code(self, code: int, length: int):
        """Write 'length' bits of code (MSB-first)."""
        for i in range(length - 1, -1, -1):
            self.write_bit((code >> i) & 1)

    def finish(self) -> bytes:
        """Pad remaining bits with zeros."""
        if self._nbits > 0:
            self._buf.append(self._cur << (8 - self._nbits))
            self._cur = 0
            self._nbits = 0
        return bytes(self._buf)


class BitReader:
    def __init__(self, data: bytes, nbits: Optional[int] = None):
        if nbits is None:
            nbits = len(data) * 8
        if nbits > len(data) * 8:
            raise EOFError("Bit length exceeds available data")
        self.data = data
        self.nbits = nbits
        self.pos = 0  # absolute bit index, MSB-first

    @property
    def remaining(self) -> int:
        return self.nbits - self.pos

    def read_bit(self) -> int:
        if self.pos >= self.nbits:
            raise EOFError("Unexpected end of bitstream")
        b = (self.data[self.pos >> 3] >> (7 - (self.pos & 7))) & 1
        self.pos += 1
        return b

    def read_code(self, length: int) -> int:
        """Read 'length' bits as an unsigned int (MSB-first)."""
        v = 0
        for _ in range(length):
            v = (v << 1) | self.read_bit()
        return v


def pack_bits(bits01: np.ndarray) -> bytes:
    """
    Pack a flat array of 0/1 into bytes (MSB-first, final byte zero-padded).
    """
    b = np.asarray(bits01, dtype=np.uint8).ravel()
    return np.packbits(b, bitorder="big").tobytes()


def unpack_bits(data: bytes, nbits: int) -> np.ndarray:
    """
    Unpack bytes -> uint8 0/1 array of exactly nbits (MSB-first).
    """
    if nbits > len(data) * 8:
        raise EOFError(f"Need {nbits} bits, only {len(data) * 8} available")
    raw = np.frombuffer(data, dtype=np.uint8)
    return np.unpackbits(raw, bitorder="big")[:nbits]


def packed_size(nbits: int) -> int:
    return (nbits + 7) // 8


def bits_to_str(bits01: np.ndarray) -> str:
    return "".join("1" if b else "0" for b in np.asarray(bits01).tolist())


def str_to_bits(s: str) -> np.ndarray:
    return np.frombuffer(s.encode("ascii"), dtype=np.uint8) - ord("0")
