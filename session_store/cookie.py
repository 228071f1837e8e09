"""Reading and writing the ``session`` cookie.

Values are percent-encoded on the way out and decoded on the way in, so any
token string survives the round trip.
"""

from __future__ import annotations

from urllib.parse import quote, unquote

from starlette.requests import cookie_parser

COOKIE_NAME = "session"


def decode_cookie(header: str | None) -> str | None:
    """Return the session token from a ``Cookie`` header, or None.

    Missing, empty and malformed headers all mean "no session".
    """
    if not header:
        return None
    value = cookie_parser(header).get(COOKIE_NAME)
    if not value:
        return None
    return unquote(value)


def encode_cookie(token: str | None) -> str:
    """Build a ``Set-Cookie`` value for the given token (empty when None)."""
    parts = [
        f"{COOKIE_NAME}={quote(token or '', safe='')}",
        "Path=/",
        "HttpOnly",
        "Secure",
    ]
    return "; ".join(parts)
