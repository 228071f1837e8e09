"""Per-request session handle.

Construct a ``Session`` from the request's Cookie header, call ``load()`` to
fetch the current session state, then create or update the session as
needed. A handle belongs to a single request and is not safe to share.
"""

from __future__ import annotations

import logging
import math
import time
from enum import Enum
from typing import Any, Mapping

from .backend import SessionStore
from .config import DEFAULT_TTL_MINUTES, Settings
from .cookie import decode_cookie, encode_cookie
from .errors import InvalidOperationError, SessionStoreError, StaleHandleError
from .identifiers import derive_key, generate_token
from .values import Attributes, AttributeValue, ValueType, encode_attributes, matches

logger = logging.getLogger(__name__)

LOGGED_IN_ATTRIBUTE = "loggedin"


class SessionState(str, Enum):
    NEW = "new"
    LOADED = "loaded"
    CREATED = "created"
    MUTATED = "mutated"
    FAILED = "failed"


def expiry_from_minutes(minutes: int | float, now: float | None = None) -> int:
    """Absolute expiry in epoch seconds, ``minutes`` from now."""
    if now is None:
        now = time.time()
    return math.floor(now + minutes * 60)


class Session:
    """A client's session, identified by the ``session`` cookie.

    Args:
        cookie_header: Raw ``Cookie`` request header (may be empty or None).
        store: Backing store for session records.
        settings: Process settings; supplies the default TTL.
        ttl_in_minutes: Overrides the TTL for this handle.
    """

    def __init__(
        self,
        cookie_header: str | None,
        store: SessionStore,
        *,
        settings: Settings | None = None,
        ttl_in_minutes: int | None = None,
    ) -> None:
        self._store = store
        self._token = decode_cookie(cookie_header)
        self._key = derive_key(self._token) if self._token else None
        if ttl_in_minutes is not None:
            self.ttl = ttl_in_minutes
        elif settings is not None:
            self.ttl = settings.session_ttl_minutes
        else:
            self.ttl = DEFAULT_TTL_MINUTES
        self._data: Attributes | None = None
        self.state = SessionState.NEW

    @property
    def session_id(self) -> str | None:
        """The token handed to the client, if any."""
        return self._token

    @property
    def session_key(self) -> str | None:
        """The storage key derived from the token."""
        return self._key

    @property
    def attributes(self) -> Attributes | None:
        return dict(self._data) if self._data is not None else None

    async def load(self) -> Attributes | None:
        """Fetch the current session from the store.

        Returns the session attributes, or None when there is no session
        cookie or no (valid) record for it.
        """
        if not self._key:
            return None
        try:
            data = await self._store.get_item(self._key)
        except SessionStoreError as e:
            logger.error("Error getting session from store: %s", e)
            raise
        if data is None:
            return None
        self._data = data
        self.state = SessionState.LOADED
        return dict(data)

    def is_logged_in(self) -> bool:
        """Login state of the loaded session. Call after load()."""
        return self.get_value(LOGGED_IN_ATTRIBUTE, ValueType.BOOLEAN) is True

    def get_value(self, key: str, value_type: ValueType = ValueType.TEXT) -> AttributeValue | None:
        """Return a cached attribute, or None if missing or of another type."""
        if self._data is None:
            return None
        value = self._data.get(key)
        if not matches(value, value_type):
            return None
        return value

    async def set_value(self, key: str, value: Any) -> Attributes:
        """Set a single attribute and write the session immediately."""
        return await self.set_values({key: value})

    async def set_values(self, values: Mapping[str, Any]) -> Attributes:
        """Merge several attributes into the session in one write."""
        self._require_key()
        if self._data is None:
            await self.load()
        if self._data is None:
            raise StaleHandleError("No session record found, create a session first")
        merged = dict(self._data)
        merged.update(encode_attributes(values))
        return await self.update_session(merged)

    async def update_session(self, data: Mapping[str, Any]) -> Attributes:
        """Replace the session's attributes and renew its expiry.

        Returns the attributes as stored, which also become the cached copy.
        """
        self._require_key()
        attributes = encode_attributes(data)
        expires_at = expiry_from_minutes(self.ttl)
        try:
            stored = await self._store.update_item(self._key, attributes, expires_at)
        except SessionStoreError as e:
            logger.error("Error updating session in store: %s", e)
            raise
        if self._data is None:
            raise StaleHandleError()
        self._data = stored
        self.state = SessionState.MUTATED
        logger.debug("Session updated (%d attributes)", len(stored))
        return dict(stored)

    async def create_session(self, data: Mapping[str, Any] | None = None) -> str:
        """Create a new session with the given attributes; return its token.

        An existing record at the same key is overwritten.
        """
        attributes = encode_attributes(data or {})
        token = generate_token()
        key = derive_key(token)
        expires_at = expiry_from_minutes(self.ttl)
        try:
            await self._store.put_item(key, attributes, expires_at)
        except SessionStoreError as e:
            logger.error("Error creating session in store: %s", e)
            raise
        self._token = token
        self._key = key
        self._data = attributes
        self.state = SessionState.CREATED
        logger.debug("Session created (ttl %s minutes)", self.ttl)
        return token

    async def destroy_session(self) -> None:
        """Delete the session record and forget the token."""
        if self._key:
            try:
                await self._store.delete_item(self._key)
            except SessionStoreError as e:
                logger.error("Error deleting session from store: %s", e)
                raise
        self._token = None
        self._key = None
        self._data = None
        self.state = SessionState.NEW

    def get_cookie(self) -> str:
        """``Set-Cookie`` header value for this session."""
        return encode_cookie(self._token)

    def _require_key(self) -> None:
        if not self._key:
            self.state = SessionState.FAILED
            raise InvalidOperationError()
