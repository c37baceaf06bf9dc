"""Severity and facility enumerations on both sides of the dispatcher.

Purpose
-------
Keep the host severity scale and the syslog priority scale as two independent
enumerations so the level map is the only place that relates them.

Contents
--------
* :class:`LogLevel` - ordered host levels ``TRACE`` .. ``FATAL``.
* :class:`SyslogPriority` - RFC 5424 severities with their short keywords.
* :class:`Facility` - syslog facilities with the numeric codes used on the wire.

System Role
-----------
Used by the level map, the matchers, the template formatter (``%L``) and the
backend adapters.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from .errors import ConfigurationError


class LogLevel(IntEnum):
    """Ordered host log levels."""

    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARN = 4
    ERROR = 5
    FATAL = 6

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _LEVEL_ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ConfigurationError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib :mod:`logging` level integer into :class:`LogLevel`.

        Values between the stdlib constants round down to the nearest level.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.WARNING)
        <LogLevel.WARN: 4>
        >>> LogLevel.from_python_level(5)
        <LogLevel.TRACE: 1>
        """
        if level >= logging.CRITICAL:
            return cls.FATAL
        if level >= logging.ERROR:
            return cls.ERROR
        if level >= logging.WARNING:
            return cls.WARN
        if level >= logging.INFO:
            return cls.INFO
        if level >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


_LEVEL_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}


class SyslogPriority(IntEnum):
    """Syslog severities, numerically equal to their RFC 5424 codes."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @property
    def syslog_name(self) -> str:
        """Return the short keyword syslog uses for this priority (``err``, ``crit``, ...)."""

        return _PRIORITY_KEYWORDS[self]

    @classmethod
    def coerce(cls, value: "SyslogPriority | str | int") -> "SyslogPriority":
        """Return the priority named or numbered by ``value``.

        Examples
        --------
        >>> SyslogPriority.coerce("err")
        <SyslogPriority.ERROR: 3>
        >>> SyslogPriority.coerce("Warning")
        <SyslogPriority.WARNING: 4>
        >>> SyslogPriority.coerce(1)
        <SyslogPriority.ALERT: 1>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member, keyword in _PRIORITY_KEYWORDS.items():
                if normalized in (keyword, member.name.lower()):
                    return member
            raise ConfigurationError(f"Unknown syslog priority: {value!r}")
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError as exc:
                raise ConfigurationError(f"Unsupported syslog priority code: {value}") from exc
        raise ConfigurationError(f"Unsupported syslog priority: {value!r}")


_PRIORITY_KEYWORDS = {
    SyslogPriority.EMERGENCY: "emerg",
    SyslogPriority.ALERT: "alert",
    SyslogPriority.CRITICAL: "crit",
    SyslogPriority.ERROR: "err",
    SyslogPriority.WARNING: "warning",
    SyslogPriority.NOTICE: "notice",
    SyslogPriority.INFO: "info",
    SyslogPriority.DEBUG: "debug",
}


class Facility(IntEnum):
    """Syslog facilities keyed by their wire codes."""

    KERN = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23

    @classmethod
    def coerce(cls, value: "Facility | str | int") -> "Facility":
        """Return the facility named or numbered by ``value``.

        Raises :class:`ConfigurationError` for anything that is not a known facility.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as exc:
                raise ConfigurationError(f"Unknown syslog facility: {value!r}") from exc
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError as exc:
                raise ConfigurationError(f"Unsupported syslog facility code: {value}") from exc
        raise ConfigurationError(f"Unsupported syslog facility: {value!r}")


__all__ = ["Facility", "LogLevel", "SyslogPriority"]
