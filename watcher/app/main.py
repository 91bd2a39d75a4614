import asyncio
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from watcher.app.application.mongodb_watcher import MongoDbWatcher
from watcher.app.composition import create_watcher_from_settings
from watcher.app.constants import OUTCOME_KIND
from watcher.app.core import SERVICE_NAME
from watcher.app.routers.health import health_router

EXIT_CODES = {
    OUTCOME_KIND.OK: 0,
    OUTCOME_KIND.EXPECTED_FAILURE: 1,
    OUTCOME_KIND.UNEXPECTED_FAULT: 2,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.bind(service_name=SERVICE_NAME, event="watcher_api_starting").info("")
    watcher = create_watcher_from_settings()
    app.state.watcher = watcher
    try:
        yield
    finally:
        logger.bind(service_name=SERVICE_NAME, event="watcher_api_stopping").info("")
        await watcher.connection.close()


def create_app() -> FastAPI:
    app = FastAPI(title="MongoDB Watcher", version="0.1.0", lifespan=lifespan)
    app.include_router(health_router)
    return app


app = create_app()


async def run_once(watcher: MongoDbWatcher) -> int:
    """Run a single check, log it and map the outcome to a process exit code."""
    try:
        outcome = await watcher.run()
    finally:
        await watcher.connection.close()

    if outcome.result is not None:
        logger.bind(
            service_name=SERVICE_NAME,
            event="watcher_check_result",
            **outcome.result.to_dict(),
        ).info("")
    else:
        logger.bind(
            service_name=SERVICE_NAME,
            event="watcher_check_fault",
            error=str(outcome.error),
        ).error("")
    return EXIT_CODES[outcome.kind]


def main() -> None:
    watcher = create_watcher_from_settings()
    sys.exit(asyncio.run(run_once(watcher)))


if __name__ == "__main__":
    main()
