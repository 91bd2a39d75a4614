"""Connection factory: only place that imports concrete MongoDB adapters."""
from __future__ import annotations

from watcher.app.infrastructure.persistence.mongo.connection import MotorMongoDbConnection
from watcher.app.ports.mongodb import MongoDbConnection


def create_mongo_connection(
    connection_string: str,
    *,
    database: str,
    timeout_seconds: float,
) -> MongoDbConnection:
    """Build the default connection; the client itself is created lazily on first use."""
    return MotorMongoDbConnection(connection_string, database, timeout_seconds=timeout_seconds)
