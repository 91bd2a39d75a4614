"""Domain models."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from watcher.app.constants import OUTCOME_KIND

_CREDENTIALS = re.compile(r"(?P<scheme>mongodb(?:\+srv)?://)(?P<user>[^:@/]+):[^@/]*@")


def redact_connection_string(connection_string: str) -> str:
    """Mask the password part of a MongoDB URI."""
    return _CREDENTIALS.sub(r"\g<scheme>\g<user>:***@", connection_string or "")


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single watcher execution (value object)."""

    watcher_name: str
    watcher_type: str
    is_valid: bool
    database: str
    connection_string: str
    description: str | None = None
    query: str | None = None
    query_result: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Serialisable dict with credentials stripped from the connection string."""
        payload: dict[str, Any] = {
            "watcher_name": self.watcher_name,
            "watcher_type": self.watcher_type,
            "is_valid": bool(self.is_valid),
            "database": self.database,
            "connection_string": redact_connection_string(self.connection_string),
            "description": self.description,
        }
        if self.query is not None:
            payload["query"] = self.query
            payload["query_result"] = self.query_result
        return payload


@dataclass(frozen=True)
class WatcherOutcome:
    """Tagged outcome: target healthy, target unhealthy, or the watcher itself broke."""

    kind: str
    result: CheckResult | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.kind == OUTCOME_KIND.OK

    @staticmethod
    def from_result(result: CheckResult) -> "WatcherOutcome":
        kind = OUTCOME_KIND.OK if result.is_valid else OUTCOME_KIND.EXPECTED_FAILURE
        return WatcherOutcome(kind=kind, result=result)

    @staticmethod
    def fault(error: BaseException) -> "WatcherOutcome":
        return WatcherOutcome(kind=OUTCOME_KIND.UNEXPECTED_FAULT, error=error)
