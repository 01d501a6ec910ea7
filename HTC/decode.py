import argparse, os
from codec_core import decompress_file
from integrity import canonical_bytes
from metrics import format_bytes


def safe_name(stored: str) -> str:
    """Stored names are never trusted as paths: keep the basename only."""
    name = os.path.basename(stored)
    if name in ("", ".", "..") or "\0" in name:
        return "decoded.txt"
    return name


def main(argv=None):
    ap = argparse.ArgumentParser(description="Decompress a Huffman text container")
    ap.add_argument("--input", required=True, help="path to .bin container")
    ap.add_argument("--output", help="path to output text (default: stored filename next to input)")
    ap.add_argument("--strict", action="store_true", help="fail when digest or symbol count does not match")
    args = ap.parse_args(argv)

    r = decompress_file(args.input)
    if args.strict:
        r.require_verified()

    output = args.output or os.path.join(os.path.dirname(args.input), safe_name(r.filename))
    os.makedirs(os.path.dirname(output) or ".", exist_ok=True)
    with open(output, "w", encoding="utf-8", errors="surrogatepass", newline="") as f:
        f.write(r.text)

    print(f"[decode] wrote {output} ({format_bytes(len(canonical_bytes(r.text)))})")
    print(f"[decode] name={r.filename!r} symbols={r.decoded_symbol_count}/{r.original_symbol_count}")
    print(f"[decode] verified={r.verified} "
          f"digest={'match' if r.digest_match else 'mismatch'} "
          f"count={'match' if r.count_match else 'mismatch'}")
    print(f"[decode] sha256={r.digest.hex()}")
    for reason in r.reasons:
        print(f"[decode] warning: {reason}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
