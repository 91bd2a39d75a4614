from __future__ import annotations

from typing import Any, Callable

from loguru import logger
from pymongo.errors import PyMongoError

from watcher.app.application.configuration import (
    MongoDbWatcherConfiguration,
    MongoDbWatcherConfigurationBuilder,
)
from watcher.app.constants import DATABASE_SOURCE, WATCHER_FAULT_MESSAGE, WATCHER_TYPE
from watcher.app.core import SERVICE_NAME
from watcher.app.domain.errors import WatcherError
from watcher.app.domain.models import CheckResult, WatcherOutcome
from watcher.app.ports.mongodb import MongoDb, MongoDbConnection, QueryResult

Configurator = Callable[[MongoDbWatcherConfigurationBuilder], Any]


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


class MongoDbWatcher:
    """
    Checks MongoDB availability and, when a query is configured, validates its result.

    Driver errors (PyMongoError) and a missing database are reported as an invalid
    CheckResult. Anything else is raised as WatcherError with the original cause.
    """

    def __init__(self, name: str, configuration: MongoDbWatcherConfiguration) -> None:
        if not name:
            raise ValueError("Watcher name can not be empty.")
        if configuration is None:
            raise ValueError("MongoDB Watcher configuration has not been provided.")

        self._name = name
        self._configuration = configuration
        self._connection: MongoDbConnection = configuration.connection_provider(configuration.connection_string)

    @property
    def name(self) -> str:
        return self._name

    @property
    def configuration(self) -> MongoDbWatcherConfiguration:
        return self._configuration

    @property
    def connection(self) -> MongoDbConnection:
        return self._connection

    async def execute(self) -> CheckResult:
        config = self._configuration
        _log("mongodb_check_started", watcher=self._name, database=config.database)
        try:
            database = await self._resolve_database()
            if database is None:
                _log("mongodb_database_not_found", watcher=self._name, database=config.database)
                return self._result(False, description=f"Database: '{config.database}' has not been found.")

            if not config.query or not config.query.strip():
                _log("mongodb_check_completed", watcher=self._name, is_valid=True, query=None)
                return self._result(True)

            query_result = await database.query(config.collection_name, config.query)
            _log("mongodb_query_executed", watcher=self._name, collection=config.collection_name)
            is_valid = await self._validate(query_result)
            _log("mongodb_check_completed", watcher=self._name, is_valid=is_valid, query=config.query)
            return self._result(is_valid, query=config.query, query_result=query_result)
        except PyMongoError as exc:
            _log("mongodb_check_failed", watcher=self._name, error=str(exc))
            return self._result(False, description=str(exc))
        except Exception as exc:
            logger.exception("mongodb watcher '{}' failed: {}", self._name, exc)
            raise WatcherError(WATCHER_FAULT_MESSAGE, exc) from exc

    async def run(self) -> WatcherOutcome:
        """Execute and tag the outcome instead of raising on watcher faults."""
        try:
            result = await self.execute()
        except WatcherError as exc:
            return WatcherOutcome.fault(exc.cause or exc)
        return WatcherOutcome.from_result(result)

    async def _resolve_database(self) -> MongoDb | None:
        database = await self._connection.get_database()
        source = DATABASE_SOURCE.CONNECTION
        if database is None:
            database = self._configuration.mongodb_provider()
            source = DATABASE_SOURCE.FALLBACK
        if database is not None:
            _log("mongodb_database_resolved", watcher=self._name, source=source)
        return database

    async def _validate(self, query_result: QueryResult) -> bool:
        # Short-circuits on the first failing validator; async ones run first.
        for predicate in self._configuration.async_validators:
            if not await predicate(query_result):
                return False
        for predicate in self._configuration.validators:
            if not predicate(query_result):
                return False
        return True

    def _result(
        self,
        is_valid: bool,
        *,
        description: str | None = None,
        query: str | None = None,
        query_result: QueryResult = None,
    ) -> CheckResult:
        return CheckResult(
            watcher_name=self._name,
            watcher_type=WATCHER_TYPE,
            is_valid=bool(is_valid),
            database=self._configuration.database,
            connection_string=self._configuration.connection_string,
            description=description,
            query=query,
            query_result=query_result,
        )


def create_watcher(
    name: str,
    connection_string: str,
    database: str,
    timeout_seconds: float | None = None,
    configurator: Configurator | None = None,
) -> MongoDbWatcher:
    """Build a configuration from primitives, let `configurator` adjust the builder, then create the watcher."""
    builder = MongoDbWatcherConfigurationBuilder(connection_string, database, timeout_seconds)
    if configurator is not None:
        configurator(builder)
    return create_watcher_from_configuration(name, builder.build())


def create_watcher_from_configuration(name: str, configuration: MongoDbWatcherConfiguration) -> MongoDbWatcher:
    return MongoDbWatcher(name, configuration)
