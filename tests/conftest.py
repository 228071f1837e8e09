"""Shared fixtures for the session store test suite."""

from __future__ import annotations

import time
from collections import Counter
from typing import Any, Mapping

import pytest

from session_store import InMemoryStore, Settings, derive_key


class RecordingStore(InMemoryStore):
    """InMemoryStore that counts calls per operation."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: Counter[str] = Counter()

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    @property
    def writes(self) -> int:
        return self.calls["put_item"] + self.calls["update_item"]

    def seed(self, token: str, data: Mapping[str, Any], ttl: int | None = None) -> None:
        """Pre-populate a record for ``token`` without counting a call."""
        key = derive_key(token)
        self._items[key] = {
            "sessionid": key,
            "data": dict(data),
            "ttl": ttl if ttl is not None else int(time.time()) + 900,
        }

    async def get_item(self, key):
        self.calls["get_item"] += 1
        return await super().get_item(key)

    async def put_item(self, key, data, expires_at):
        self.calls["put_item"] += 1
        await super().put_item(key, data, expires_at)

    async def update_item(self, key, data, expires_at):
        self.calls["update_item"] += 1
        return await super().update_item(key, data, expires_at)

    async def delete_item(self, key):
        self.calls["delete_item"] += 1
        await super().delete_item(key)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def logged_in_store(store) -> RecordingStore:
    """Store holding a logged-in session for cookie ``session=12345``."""
    store.seed("12345", {"loggedin": True, "bsn": "12345678", "state": "12345"})
    return store


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        session_table="test-sessions",
        session_ttl_minutes=15,
        aws_region="eu-west-1",
    )
