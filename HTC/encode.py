import argparse, os, time
from huffman import build_codebook, build_tree, count_frequencies
from codec_core import compress
from integrity import canonical_bytes
from metrics import compression_ratio, space_saved, format_bytes, entropy, mean_code_length, code_efficiency


def default_output(path: str) -> str:
    root, ext = os.path.splitext(path)
    if ext == ".txt":
        return root + ".bin"
    return path + ".bin"


def main(argv=None):
    ap = argparse.ArgumentParser(description="Huffman-compress a text file")
    ap.add_argument("--input", required=True, help="path to UTF-8 text file")
    ap.add_argument("--output", help="path to .bin container (default: input with .bin)")
    ap.add_argument("--name", help="filename stored in the container (default: input basename)")
    args = ap.parse_args(argv)

    output = args.output or default_output(args.input)
    name = args.name or os.path.basename(args.input)

    with open(args.input, "r", encoding="utf-8", newline="") as f:
        text = f.read()

    t0 = time.perf_counter()
    blob = compress(text, name)
    ms = (time.perf_counter() - t0) * 1000.0

    os.makedirs(os.path.dirname(output) or ".", exist_ok=True)
    with open(output, "wb") as f:
        f.write(blob)

    orig = len(canonical_bytes(text))
    print(f"[encode] wrote {output}")
    print(f"[encode] name={name!r} symbols={len(text)}")
    print(f"[encode] original={format_bytes(orig)} compressed={format_bytes(len(blob))}")
    print(f"[encode] ratio={compression_ratio(orig, len(blob)):.2f}% saved={space_saved(orig, len(blob)):.2f}%")
    if text:
        # stats only; compress() above built its own tree
        freqs = count_frequencies(text)
        codes = build_codebook(build_tree(freqs))
        print(f"[encode] unique={len(freqs)} entropy={entropy(freqs):.4f} "
              f"mean_code={mean_code_length(freqs, codes):.4f} bits/symbol "
              f"efficiency={code_efficiency(freqs, codes):.4f}")
    print(f"[encode] time={ms:.0f} ms")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
