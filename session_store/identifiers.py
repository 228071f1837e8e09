"""Session tokens and the storage keys derived from them.

The cookie carries the token; the table is keyed by a SHA-256 hash of it, so
the store never holds a value that could be replayed as a cookie.
"""

from __future__ import annotations

import base64
import hashlib
import secrets

TOKEN_BYTES = 32  # 256 bits


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def derive_key(token: str) -> str:
    """Return base64(SHA-256(token)), always 44 characters."""
    digest = hashlib.sha256(token.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")
