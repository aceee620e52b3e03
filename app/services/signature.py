"""Shopify webhook signature verification.

Shopify signs every webhook with HMAC-SHA256 over the raw request body,
base64-encodes the digest and sends it in X-Shopify-Hmac-SHA256.

- Comparison uses hmac.compare_digest() (constant time)
- Missing secret -> verification always fails (fail-closed)
- Any malformed header -> False, never an exception
"""

from __future__ import annotations

import base64
import hashlib
import hmac


def compute_signature(secret: str, body: bytes) -> str:
    """Base64 HMAC-SHA256 of the raw body, as Shopify computes it."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_shopify(secret: str, body: bytes, signature_header: str | None) -> bool:
    """Verify a Shopify webhook signature.

    Args:
        secret: Shared webhook signing secret
        body: Raw request body bytes, exactly as received
        signature_header: Value of the X-Shopify-Hmac-SHA256 header

    Returns:
        True if the signature is valid
    """
    if not secret or not signature_header:
        return False

    try:
        supplied = signature_header.encode("ascii")
    except (AttributeError, UnicodeEncodeError):
        return False

    expected = compute_signature(secret, body).encode("ascii")
    return hmac.compare_digest(expected, supplied)
