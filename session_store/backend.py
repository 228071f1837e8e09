"""Session storage backends."""

from __future__ import annotations

import time
from typing import Any, Mapping, Protocol, runtime_checkable

from .values import Attributes, decode_attributes


@runtime_checkable
class SessionStore(Protocol):
    """Protocol for the key-value table holding session records.

    Records are keyed by the hashed session key and carry a ``data`` map and
    an absolute ``ttl`` in epoch seconds.
    """

    async def get_item(self, key: str) -> Attributes | None:
        """Return the record's data, or None if missing or without data."""
        ...

    async def put_item(self, key: str, data: Mapping[str, Any], expires_at: int) -> None:
        """Create or overwrite a record."""
        ...

    async def update_item(self, key: str, data: Mapping[str, Any], expires_at: int) -> Attributes:
        """Replace a record's data and expiry, returning the stored data."""
        ...

    async def delete_item(self, key: str) -> None:
        """Delete a record."""
        ...


class InMemoryStore:
    """In-memory session store for development/testing.

    Not suitable for production: records are lost on restart and not
    shared across processes. Expired records are dropped on read, standing
    in for DynamoDB's TTL reaper.
    """

    def __init__(self) -> None:
        self._items: dict[str, dict[str, Any]] = {}

    async def get_item(self, key: str) -> Attributes | None:
        item = self._items.get(key)
        if item is None:
            return None
        if item["ttl"] <= time.time():
            del self._items[key]
            return None
        if "data" not in item:
            return None
        return decode_attributes(item["data"])

    async def put_item(self, key: str, data: Mapping[str, Any], expires_at: int) -> None:
        self._items[key] = {"sessionid": key, "data": dict(data), "ttl": expires_at}

    async def update_item(self, key: str, data: Mapping[str, Any], expires_at: int) -> Attributes:
        item = self._items.setdefault(key, {"sessionid": key})
        item["data"] = dict(data)
        item["ttl"] = expires_at
        return decode_attributes(item["data"])

    async def delete_item(self, key: str) -> None:
        self._items.pop(key, None)

    def expires_at(self, key: str) -> int | None:
        item = self._items.get(key)
        return item["ttl"] if item else None
