"""Watcher-level constants shared across modules."""
from __future__ import annotations

WATCHER_TYPE = "MongoDB"

# Applied to server selection and query execution when no timeout is configured.
DEFAULT_TIMEOUT_SECONDS = 5.0

WATCHER_FAULT_MESSAGE = "There was an error while trying to access the MongoDB."


class OUTCOME_KIND:
    OK = "OK"
    EXPECTED_FAILURE = "EXPECTED_FAILURE"
    UNEXPECTED_FAULT = "UNEXPECTED_FAULT"


class DATABASE_SOURCE:
    CONNECTION = "connection"
    FALLBACK = "fallback"
