from __future__ import annotations
import hashlib
import hmac
from dataclasses import dataclass, field
from typing import List

DIGEST_SIZE = 32


def canonical_bytes(text: str) -> bytes:
    # surrogatepass keeps every codepoint in 0..0xFFFF hashable
    return text.encode("utf-8", "surrogatepass")


def digest(text: str) -> bytes:
    """SHA-256 of the text's UTF-8 bytes (32 bytes)."""
    return hashlib.sha256(canonical_bytes(text)).digest()


@dataclass
class Verification:
    digest_match: bool
    count_match: bool
    reasons: List[str] = field(default_factory=list)

    @property
    def verified(self) -> bool:
        return self.digest_match and self.count_match


def verify(text: str, stored_digest: bytes, stored_count: int) -> Verification:
    """
    Compare decoded text against the stored digest and symbol count.
    Both checks run independently; a mismatch is reported, not raised.
    """
    digest_match = hmac.compare_digest(digest(text), stored_digest)
    count_match = len(text) == stored_count
    reasons = []
    if not digest_match:
        reasons.append("digest mismatch")
    if not count_match:
        reasons.append(f"symbol count mismatch: decoded {len(text)}, stored {stored_count}")
    return Verification(digest_match, count_match, reasons)
