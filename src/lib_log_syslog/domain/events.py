"""Domain event describing a single log message handed over by the host.

Purpose
-------
Provide the immutable value the host framework creates and every dispatcher
receives. The dispatcher reads it and never mutates it.

Contents
--------
* :class:`LogEvent` dataclass.
* Utility function ``_ensure_aware`` for timestamp validation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event delivered to dispatchers.

    Attributes
    ----------
    level:
        Host :class:`LogLevel` of the event.
    source_class:
        Name of the type that emitted the event; may be empty when the host
        has no class to report.
    message:
        Message text supplied by the caller.
    timestamp:
        Time of the event in timezone-aware UTC.
    """

    level: LogLevel
    source_class: str
    message: str
    timestamp: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.level, LogLevel):
            raise TypeError(f"level must be a LogLevel, got {type(self.level).__name__}")
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event to a dictionary with an ISO8601 timestamp."""

        return {
            "level": self.level.name,
            "source_class": self.source_class,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }

    def replace(self, **changes: Any) -> "LogEvent":
        """Return a copied event with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEvent"]
