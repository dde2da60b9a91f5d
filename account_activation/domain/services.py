# account_activation/domain/services.py
from __future__ import annotations

import hmac
import secrets
from datetime import datetime, timezone

# 32 random bytes -> 43 url-safe characters, 256 bits of entropy.
ACTIVATION_TOKEN_BYTES = 32


def generate_activation_token() -> str:
    """Unguessable, URL-safe activation token from the OS CSPRNG."""
    return secrets.token_urlsafe(ACTIVATION_TOKEN_BYTES)


def secure_compare(a: str, b: str) -> bool:
    """
    Constant-time comparison for secrets.
    Exact match only: no case folding, no prefix matching.
    """
    try:
        # hmac.compare_digest supports str if both are ASCII
        return hmac.compare_digest(a, b)
    except TypeError:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
