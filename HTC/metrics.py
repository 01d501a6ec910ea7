from typing import Dict

import numpy as np


def compression_ratio(original_bytes: int, compressed_bytes: int) -> float:
    """Compressed size as a percentage of the original size."""
    if original_bytes == 0:
        return float("inf") if compressed_bytes else 0.0
    return 100.0 * compressed_bytes / original_bytes


def space_saved(original_bytes: int, compressed_bytes: int) -> float:
    return 100.0 - compression_ratio(original_bytes, compressed_bytes)


def format_bytes(n: int) -> str:
    if n == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    x, i = float(n), 0
    while x >= 1024 and i < len(units) - 1:
        x /= 1024
        i += 1
    return f"{round(x, 2):g} {units[i]}"


def entropy(freqs: Dict[str, int]) -> float:
    """Shannon entropy in bits per symbol."""
    if not freqs:
        return 0.0
    counts = np.array(list(freqs.values()), dtype=np.float64)
    p = counts / counts.sum()
    return float(-np.sum(p * np.log2(p)))


def mean_code_length(freqs: Dict[str, int], codes: Dict[str, str]) -> float:
    """Average bits per symbol under the given code table."""
    if not freqs:
        return 0.0
    counts = np.array([freqs[s] for s in codes], dtype=np.float64)
    lengths = np.array([len(codes[s]) for s in codes], dtype=np.float64)
    return float(np.dot(counts, lengths) / counts.sum())


def code_efficiency(freqs: Dict[str, int], codes: Dict[str, str]) -> float:
    """Entropy over mean code length (1.0 is optimal)."""
    L = mean_code_length(freqs, codes)
    if L == 0.0:
        return 0.0
    return entropy(freqs) / L
