import numpy as np
import pytest

from bitpack import BitReader, BitWriter, bits_to_str, pack_bits, packed_size, str_to_bits, unpack_bits


def test_pack_msb_first_zero_padded():
    assert pack_bits(np.array([1, 0, 1], dtype=np.uint8)) == b"\xa0"
    assert pack_bits(str_to_bits("11111111" "1")) == b"\xff\x80"
    assert pack_bits(np.zeros(0, dtype=np.uint8)) == b""


def test_unpack_exact_length():
    bits = unpack_bits(b"\xa0", 3)
    assert bits.tolist() == [1, 0, 1]
    assert unpack_bits(b"", 0).size == 0


def test_unpack_too_short():
    with pytest.raises(EOFError):
        unpack_bits(b"\x00", 9)


def test_pack_unpack_random_lengths():
    rng = np.random.default_rng(0)
    for n in range(0, 40):
        bits = rng.integers(0, 2, size=n).astype(np.uint8)
        data = pack_bits(bits)
        assert len(data) == packed_size(n)
        assert np.array_equal(unpack_bits(data, n), bits)


def test_bit_writer():
    bw = BitWriter()
    bw.write_code(0b101, 3)
    bw.write_bit(1)
    assert bw.length == 4
    assert bw.finish() == b"\xb0"


def test_bit_writer_full_bytes():
    bw = BitWriter()
    bw.write_code(0x0061, 16)
    assert bw.finish() == b"\x00\x61"


def test_bit_reader_respects_limit():
    br = BitReader(b"\xff", 3)
    assert [br.read_bit() for _ in range(3)] == [1, 1, 1]
    assert br.remaining == 0
    with pytest.raises(EOFError):
        br.read_bit()


def test_bit_reader_read_code():
    br = BitReader(b"\x80\x30\x80", 17)
    assert br.read_bit() == 1
    assert br.read_code(16) == 0x0061
    assert br.remaining == 0


def test_bit_reader_limit_beyond_data():
    with pytest.raises(EOFError):
        BitReader(b"", 1)


def test_bit_strings():
    assert bits_to_str(str_to_bits("0110")) == "0110"
    assert str_to_bits("").size == 0
