"""Base64url and JSON helpers for compact JWT segments."""

import base64
import binascii
import json
from typing import Any, Mapping


def pad(val: str) -> str:
    """Pad base64 values if need be: JWT calls to omit trailing padding."""
    return val + "=" * (-len(val) % 4)


def b64_to_bytes(val: str, urlsafe=False) -> bytes:
    """Convert a base 64 string to bytes, rejecting characters outside the alphabet.

    Raises:
        ValueError: If `val` is not valid base 64

    """
    try:
        return base64.b64decode(
            pad(val), altchars=b"-_" if urlsafe else None, validate=True
        )
    except binascii.Error as err:
        raise ValueError(f"Invalid base64 value: {err}") from err


def bytes_to_b64(val: bytes, urlsafe=False, pad=True, encoding: str = "ascii") -> str:
    """Convert a byte string to base 64."""
    b64 = (
        base64.urlsafe_b64encode(val).decode(encoding)
        if urlsafe
        else base64.b64encode(val).decode(encoding)
    )
    return b64 if pad else b64.rstrip("=")


def dict_to_b64(value: Mapping[str, Any]) -> str:
    """Encode a dictionary as a b64 string."""
    return bytes_to_b64(json.dumps(value).encode(), urlsafe=True, pad=False)


def b64_to_dict(value: str) -> Mapping[str, Any]:
    """Decode a dictionary from a b64 encoded value."""
    return json.loads(b64_to_bytes(value, urlsafe=True))
