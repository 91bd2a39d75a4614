"""Domain errors raised by watchers."""
from __future__ import annotations


class WatcherError(Exception):
    """Raised when a watcher itself breaks, as opposed to the watched target being unhealthy."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
