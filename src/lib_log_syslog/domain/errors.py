"""Exception hierarchy shared by every layer of the dispatcher."""

from __future__ import annotations


class LogSyslogError(Exception):
    """Base class for all errors raised by :mod:`lib_log_syslog`."""


class ConfigurationError(LogSyslogError, ValueError):
    """Invalid dispatcher configuration detected at construction time."""


class BackendError(LogSyslogError):
    """Base class for failures reported by a backend transport."""


class BackendConnectionError(BackendError):
    """The backend handle could not be opened."""


class BackendWriteError(BackendError):
    """A single write to an opened backend handle failed."""


__all__ = [
    "BackendConnectionError",
    "BackendError",
    "BackendWriteError",
    "ConfigurationError",
    "LogSyslogError",
]
