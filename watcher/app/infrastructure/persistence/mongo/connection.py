"""Motor implementations of the MongoDbConnection and MongoDb ports."""
from __future__ import annotations

import inspect
from typing import Any

from bson import json_util
from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from watcher.app.core import SERVICE_NAME
from watcher.app.domain.models import redact_connection_string


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def _to_ms(timeout_seconds: float) -> int:
    return max(1, int(timeout_seconds * 1000))


class MotorMongoDb:
    """MongoDb implementation: runs extended-JSON filter queries with a server-side time limit."""

    def __init__(self, database: AsyncIOMotorDatabase, *, timeout_seconds: float) -> None:
        self._database = database
        self._max_time_ms = _to_ms(timeout_seconds)

    @property
    def name(self) -> str:
        return self._database.name

    async def query(self, collection_name: str, query: str) -> list[dict[str, Any]]:
        filter_doc = json_util.loads(query)
        if not isinstance(filter_doc, dict):
            raise ValueError("MongoDB query must be a JSON document")
        cursor = self._database[collection_name].find(filter_doc).max_time_ms(self._max_time_ms)
        return await cursor.to_list(length=None)


class MotorMongoDbConnection:
    """MongoDbConnection implementation. The client is created on first use and reused afterwards."""

    def __init__(self, connection_string: str, database: str, *, timeout_seconds: float) -> None:
        self._connection_string = connection_string
        self._database = database
        self._timeout_seconds = float(timeout_seconds)
        self._client: AsyncIOMotorClient | None = None

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            _log(
                "mongo_client_created",
                connection_string=redact_connection_string(self._connection_string),
            )
            self._client = AsyncIOMotorClient(
                self._connection_string,
                serverSelectionTimeoutMS=_to_ms(self._timeout_seconds),
            )
        return self._client

    async def get_database(self) -> MotorMongoDb | None:
        """Return the configured database, or None when the server does not know it."""
        client = self.client
        names = await client.list_database_names()
        if self._database not in names:
            return None
        return MotorMongoDb(client[self._database], timeout_seconds=self._timeout_seconds)

    async def close(self) -> None:
        if self._client is not None:
            res = self._client.close()
            if inspect.isawaitable(res):
                await res
            self._client = None
