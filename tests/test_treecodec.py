import pytest

from errors import CorruptTree, UnsupportedSymbol
from huffman import Internal, Leaf, build_codebook, build_tree, count_frequencies, tree_depth
from treecodec import SYMBOL_BITS, check_symbols, deserialize_tree, serialize_tree


def test_serialize_single_leaf():
    data, nbits = serialize_tree(Leaf("a"))
    assert nbits == 1 + SYMBOL_BITS
    assert data == b"\x80\x30\x80"


def test_serialize_hello_length():
    tree = build_tree(count_frequencies("hello"))
    _, nbits = serialize_tree(tree)
    # 3 internal nodes, 4 leaves
    assert nbits == 3 + 4 * (1 + SYMBOL_BITS)


def test_round_trip_keeps_paths():
    text = "She sells sea shells by the sea shore. é中￿\x00"
    tree = build_tree(count_frequencies(text))
    data, nbits = serialize_tree(tree)
    back = deserialize_tree(data, nbits)
    assert build_codebook(back) == build_codebook(tree)


def test_round_trip_single_leaf():
    data, nbits = serialize_tree(Leaf("z"))
    assert deserialize_tree(data, nbits) == Leaf("z")


def test_unsupported_symbol():
    tree = Internal(Leaf("a"), Leaf("\U0001F600"))
    with pytest.raises(UnsupportedSymbol):
        serialize_tree(tree)


def test_exhausted_stream():
    with pytest.raises(CorruptTree):
        deserialize_tree(b"\x00", 1)
    with pytest.raises(CorruptTree):
        deserialize_tree(b"", 0)
    # leaf marker with a cut symbol
    with pytest.raises(CorruptTree):
        deserialize_tree(b"\x80\x30", 10)


def test_trailing_bits():
    data, nbits = serialize_tree(Leaf("a"))
    with pytest.raises(CorruptTree):
        deserialize_tree(data, nbits + 1)


def test_declared_length_beyond_data():
    data, nbits = serialize_tree(Leaf("a"))
    with pytest.raises(CorruptTree):
        deserialize_tree(data, len(data) * 8 + 1)


def test_duplicate_leaf_symbol():
    data, nbits = serialize_tree(Internal(Leaf("a"), Leaf("a")))
    with pytest.raises(CorruptTree):
        deserialize_tree(data, nbits)


def test_deep_chain():
    node = Leaf(chr(0))
    for i in range(1, 5000):
        node = Internal(Leaf(chr(i)), node)
    data, nbits = serialize_tree(node)
    back = deserialize_tree(data, nbits)
    assert tree_depth(back) == 4999
    assert build_codebook(back) == build_codebook(node)


def test_check_symbols():
    check_symbols("")
    check_symbols("plain ￿")
    with pytest.raises(UnsupportedSymbol, match="position 1"):
        check_symbols("a\U0001F600")
