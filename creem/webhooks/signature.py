"""
Webhook Signature Verification

HMAC-SHA256 over the raw request body, compared in constant time.
Secret and payload are passed explicitly; nothing is retained between calls.
"""

import hashlib
import hmac
from typing import Optional, Union

Payload = Union[bytes, bytearray, str]


def _to_bytes(value: Payload) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def generate_signature(payload: Payload, secret: str) -> str:
    """
    Compute the lowercase hex HMAC-SHA256 signature of a payload.

    Args:
        payload: Raw request body as bytes or text (text is UTF-8 encoded)
        secret: Webhook signing secret

    Returns:
        Hex-encoded signature
    """
    return hmac.new(
        secret.encode("utf-8"),
        _to_bytes(payload),
        hashlib.sha256,
    ).hexdigest()


def verify_signature(
    payload: Payload,
    signature: Optional[str],
    secret: str,
) -> bool:
    """
    Check a supplied signature against the payload.

    Inputs of a different length are rejected without comparing bytes;
    equal-length inputs go through hmac.compare_digest.

    Args:
        payload: Raw request body as bytes or text
        signature: Signature header value supplied by the sender
        secret: Webhook signing secret

    Returns:
        True if the signature matches
    """
    if not isinstance(signature, str) or not signature:
        return False

    expected = generate_signature(payload, secret).encode("utf-8")
    supplied = signature.encode("utf-8")

    if len(supplied) != len(expected):
        return False

    return hmac.compare_digest(supplied, expected)
