"""Ports: MongoDB connection and database handles. Implementations live in infrastructure."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol

QueryResult = Any
Validator = Callable[[QueryResult], bool]
AsyncValidator = Callable[[QueryResult], Awaitable[bool]]


class MongoDb(Protocol):
    """Interface for running a query against a resolved database."""

    async def query(self, collection_name: str, query: str) -> QueryResult: ...


class MongoDbConnection(Protocol):
    """Interface for resolving a database handle from a server connection."""

    async def get_database(self) -> MongoDb | None: ...

    async def close(self) -> None:
        """Release resources (e.g. DB client). No-op allowed if nothing to close."""
        ...


ConnectionProvider = Callable[[str], MongoDbConnection]
MongoDbProvider = Callable[[], "MongoDb | None"]
