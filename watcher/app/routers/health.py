import json
from typing import Any

from bson import json_util
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from watcher.app.constants import OUTCOME_KIND, WATCHER_FAULT_MESSAGE
from watcher.app.core import SERVICE_NAME

health_router = APIRouter(tags=["Health"])


def _log(event: str, **kwargs: Any) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


@health_router.get(
    "/health/live",
    summary="Liveness probe",
    description="Returns 200 if the watcher process is running.",
    responses={200: {"description": "Service is alive."}},
)
async def live() -> dict:
    return {"status": "ok"}


@health_router.get(
    "/health/mongodb",
    summary="MongoDB check",
    description="Runs the configured MongoDB watcher once and returns its check result.",
    responses={
        200: {"description": "MongoDB is reachable and the query result is valid."},
        503: {"description": "MongoDB is unreachable, the database is missing, or validation failed."},
        500: {"description": "The watcher itself failed."},
    },
)
async def mongodb(request: Request) -> JSONResponse:
    watcher = getattr(request.app.state, "watcher", None)
    if watcher is None:
        _log("watcher_not_initialized")
        return JSONResponse(status_code=503, content={"detail": "Watcher not configured"})

    outcome = await watcher.run()
    if outcome.kind == OUTCOME_KIND.UNEXPECTED_FAULT:
        _log("watcher_fault", watcher=watcher.name, error=str(outcome.error))
        return JSONResponse(status_code=500, content={"detail": WATCHER_FAULT_MESSAGE})
    status_code = 200 if outcome.ok else 503
    return JSONResponse(status_code=status_code, content=jsonable(outcome.result.to_dict()))


def jsonable(payload: dict[str, Any]) -> Any:
    """Convert BSON values (ObjectId, datetime, ...) in query results to plain JSON."""
    return json.loads(json_util.dumps(payload, json_options=json_util.RELAXED_JSON_OPTIONS))
