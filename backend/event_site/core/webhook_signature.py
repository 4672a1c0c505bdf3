"""Webhook Signature — HMAC-SHA256 verification over the raw request body.

Invariants:
    - Signature is the lowercase hex digest of HMAC-SHA256(secret, raw_body)
    - Missing secret or missing signature never verifies
    - Comparison is constant-time (hmac.compare_digest)
"""

import hashlib
import hmac


def compute_signature(secret: str, body: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(secret: str | None, body: bytes, signature: str | None) -> bool:
    """True only when the header signature matches the body digest."""
    if not secret or not signature:
        return False
    expected = compute_signature(secret, body)
    return hmac.compare_digest(
        expected.encode("ascii"), signature.strip().lower().encode("utf-8"),
    )
