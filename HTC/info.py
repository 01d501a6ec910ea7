import argparse, os
from bitstream import unpack_container
from bitpack import bits_to_str
from huffman import build_codebook, leaf_symbols, tree_depth
from metrics import format_bytes


def main(argv=None):
    ap = argparse.ArgumentParser(description="Show the contents of a Huffman text container")
    ap.add_argument("--input", required=True, help="path to .bin container")
    ap.add_argument("--bits", action="store_true", help="also print the encoded data bits")
    ap.add_argument("--codes", action="store_true", help="also print the code table")
    args = ap.parse_args(argv)

    with open(args.input, "rb") as f:
        c = unpack_container(f.read())

    print(f"[info] {args.input} ({format_bytes(os.path.getsize(args.input))})")
    print(f"[info] name={c.filename!r} symbols={c.symbol_count}")
    if c.tree is None:
        print("[info] tree: empty")
    else:
        print(f"[info] tree: {c.tree_bits} bits, {len(leaf_symbols(c.tree))} leaves, depth {tree_depth(c.tree)}")
    print(f"[info] data: {c.data_bits.size} bits")
    print(f"[info] sha256={c.digest.hex()}")
    if args.codes and c.tree is not None:
        for sym, code in sorted(build_codebook(c.tree).items(), key=lambda kv: (len(kv[1]), kv[1])):
            print(f"[info]   U+{ord(sym):04X} {sym!r:>8} {code}")
    if args.bits:
        print(bits_to_str(c.data_bits))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
