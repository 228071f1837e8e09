"""Shared fixtures for integration tests against DynamoDB Local.

All integration tests are skipped unless DYNAMODB_ENDPOINT is set, so the
suite runs in CI without a database. Start one locally with:

    docker run -p 8000:8000 amazon/dynamodb-local
    DYNAMODB_ENDPOINT=http://localhost:8000 pytest -m integration

Optional env vars:
    AWS_REGION          — defaults to eu-west-1
    SESSION_TABLE       — defaults to integration-sessions
"""

from __future__ import annotations

import os
import uuid

import pytest
import pytest_asyncio

from session_store import DynamoDBSessionStore, Settings

pytestmark = pytest.mark.integration


@pytest.fixture(scope="session")
def dynamodb_env():
    """Return DynamoDB Local settings or skip."""
    endpoint = os.environ.get("DYNAMODB_ENDPOINT")
    if not endpoint:
        pytest.skip("Integration tests require DYNAMODB_ENDPOINT")
    # DynamoDB Local accepts any credentials
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "dummy")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "dummy")
    return Settings(
        session_table=os.environ.get("SESSION_TABLE", "integration-sessions"),
        dynamodb_endpoint=endpoint,
        aws_region=os.environ.get("AWS_REGION", "eu-west-1"),
    )


@pytest_asyncio.fixture
async def dynamodb_store(dynamodb_env):
    """A fresh table per test, dropped afterwards."""
    settings = dynamodb_env.model_copy(
        update={"session_table": f"{dynamodb_env.session_table}-{uuid.uuid4().hex[:8]}"}
    )
    store = DynamoDBSessionStore.from_settings(settings)
    await store.create_table()
    yield store
    await store.delete_table()
