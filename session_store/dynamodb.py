"""DynamoDB session store for production deployments."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from .config import Settings
from .errors import SessionStoreError
from .values import Attributes, decode_attributes, encode_attributes

KEY_ATTRIBUTE = "sessionid"


class DynamoDBSessionStore:
    """Session store using AWS DynamoDB.

    Table schema:
        Partition key: sessionid (S, hashed session token)
        Attributes: data (M), ttl (N, epoch seconds)

    Enable TTL on the `ttl` attribute for automatic cleanup.
    """

    def __init__(
        self,
        table_name: str = "sessions",
        endpoint_url: str = "",
        region_name: str = "eu-west-1",
    ) -> None:
        self._table_name = table_name
        self._session = aioboto3.Session()
        self._endpoint_url = endpoint_url or None
        self._region_name = region_name

    @classmethod
    def from_settings(cls, settings: Settings) -> DynamoDBSessionStore:
        return cls(
            table_name=settings.session_table,
            endpoint_url=settings.dynamodb_endpoint,
            region_name=settings.aws_region,
        )

    @property
    def table_name(self) -> str:
        return self._table_name

    @asynccontextmanager
    async def _table(self, action: str) -> AsyncIterator[Any]:
        try:
            async with self._session.resource(
                "dynamodb",
                endpoint_url=self._endpoint_url,
                region_name=self._region_name,
            ) as dynamodb:
                yield await dynamodb.Table(self._table_name)
        except (ClientError, BotoCoreError) as e:
            raise SessionStoreError(f"DynamoDB {action} failed: {e}") from e

    async def get_item(self, key: str) -> Attributes | None:
        async with self._table("get_item") as table:
            response = await table.get_item(Key={KEY_ATTRIBUTE: key})

        item = response.get("Item")
        if item is None or item.get("data") is None:
            return None
        return decode_attributes(item["data"])

    async def put_item(self, key: str, data: Mapping[str, Any], expires_at: int) -> None:
        async with self._table("put_item") as table:
            await table.put_item(
                Item={
                    KEY_ATTRIBUTE: key,
                    "data": encode_attributes(data),
                    "ttl": expires_at,
                }
            )

    async def update_item(self, key: str, data: Mapping[str, Any], expires_at: int) -> Attributes:
        # ttl and data are reserved words, hence the name aliases
        async with self._table("update_item") as table:
            response = await table.update_item(
                Key={KEY_ATTRIBUTE: key},
                UpdateExpression="SET #ttl = :ttl, #data = :data",
                ExpressionAttributeNames={"#ttl": "ttl", "#data": "data"},
                ExpressionAttributeValues={
                    ":ttl": expires_at,
                    ":data": encode_attributes(data),
                },
                ReturnValues="ALL_NEW",
            )
        return decode_attributes(response["Attributes"]["data"])

    async def delete_item(self, key: str) -> None:
        async with self._table("delete_item") as table:
            await table.delete_item(Key={KEY_ATTRIBUTE: key})

    # Table lifecycle, for test fixtures only.

    async def create_table(self) -> None:
        async with self._session.client(
            "dynamodb",
            endpoint_url=self._endpoint_url,
            region_name=self._region_name,
        ) as client:
            await client.create_table(
                TableName=self._table_name,
                AttributeDefinitions=[{"AttributeName": KEY_ATTRIBUTE, "AttributeType": "S"}],
                KeySchema=[{"AttributeName": KEY_ATTRIBUTE, "KeyType": "HASH"}],
                BillingMode="PAY_PER_REQUEST",
            )
            waiter = client.get_waiter("table_exists")
            await waiter.wait(TableName=self._table_name)

    async def delete_table(self) -> None:
        async with self._session.client(
            "dynamodb",
            endpoint_url=self._endpoint_url,
            region_name=self._region_name,
        ) as client:
            await client.delete_table(TableName=self._table_name)
