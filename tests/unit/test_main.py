import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from watcher.app import main as main_module
from watcher.app.application.configuration import MongoDbWatcherConfigurationBuilder
from watcher.app.application.mongodb_watcher import MongoDbWatcher
from tests.conftest import FakeConnection, FakeMongoDb


def _watcher(connection: FakeConnection) -> MongoDbWatcher:
    config = (
        MongoDbWatcherConfigurationBuilder("mongodb://localhost", "orders")
        .with_connection_provider(lambda _: connection)
        .build()
    )
    return MongoDbWatcher("orders-watcher", config)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("connection", "expected"),
    [
        (FakeConnection(FakeMongoDb()), 0),
        (FakeConnection(None), 1),
        (FakeConnection(raise_on_get=ServerSelectionTimeoutError("timed out")), 1),
        (FakeConnection(raise_on_get=RuntimeError("boom")), 2),
    ],
)
async def test_run_once_maps_outcome_to_exit_code_and_closes(connection, expected):
    code = await main_module.run_once(_watcher(connection))

    assert code == expected
    assert connection.closed is True


def test_main_exits_with_check_code(monkeypatch):
    monkeypatch.setattr(main_module, "create_watcher_from_settings", lambda: _watcher(FakeConnection(None)))

    with pytest.raises(SystemExit) as exc_info:
        main_module.main()

    assert exc_info.value.code == 1


def test_app_lifespan_wires_watcher_and_closes_connection(monkeypatch):
    connection = FakeConnection(FakeMongoDb())
    monkeypatch.setattr(main_module, "create_watcher_from_settings", lambda: _watcher(connection))

    with TestClient(main_module.create_app()) as client:
        r = client.get("/health/mongodb")
        assert r.status_code == 200
        assert connection.closed is False

    assert connection.closed is True
