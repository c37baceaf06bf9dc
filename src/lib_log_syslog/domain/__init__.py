"""Domain entities and value objects used by the dispatcher."""

from __future__ import annotations

from .caller import UNKNOWN, CallerContext
from .errors import (
    BackendConnectionError,
    BackendError,
    BackendWriteError,
    ConfigurationError,
    LogSyslogError,
)
from .events import LogEvent
from .level_map import DEFAULT_LEVEL_MAP, LevelMap
from .levels import Facility, LogLevel, SyslogPriority
from .matchers import Matcher, at_least, at_most, matches

__all__ = [
    "BackendConnectionError",
    "BackendError",
    "BackendWriteError",
    "CallerContext",
    "ConfigurationError",
    "DEFAULT_LEVEL_MAP",
    "Facility",
    "LevelMap",
    "LogEvent",
    "LogLevel",
    "LogSyslogError",
    "Matcher",
    "SyslogPriority",
    "UNKNOWN",
    "at_least",
    "at_most",
    "matches",
]
