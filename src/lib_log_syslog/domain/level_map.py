"""Total mapping from host levels to syslog priorities.

Purpose
-------
Translate :class:`LogLevel` into :class:`SyslogPriority`. The default table
folds ``TRACE`` and ``DEBUG`` into syslog ``debug`` and escalates ``FATAL`` to
``alert`` so fatal events reach durable storage rather than a console.

Contents
--------
* :data:`DEFAULT_LEVEL_MAP` - the default table.
* :class:`LevelMap` - validated, read-only mapping with :meth:`LevelMap.resolve`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .errors import ConfigurationError
from .levels import LogLevel, SyslogPriority

DEFAULT_LEVEL_MAP: Mapping[LogLevel, SyslogPriority] = MappingProxyType(
    {
        LogLevel.TRACE: SyslogPriority.DEBUG,
        LogLevel.DEBUG: SyslogPriority.DEBUG,
        LogLevel.INFO: SyslogPriority.INFO,
        LogLevel.WARN: SyslogPriority.WARNING,
        LogLevel.ERROR: SyslogPriority.ERROR,
        LogLevel.FATAL: SyslogPriority.ALERT,
    }
)

LevelMapping = Mapping["LogLevel | str", "SyslogPriority | str | int"]


@dataclass(slots=True, frozen=True)
class LevelMap:
    """Read-only host level to syslog priority table.

    Every :class:`LogLevel` must be present; a partial mapping raises
    :class:`ConfigurationError` instead of falling back to the defaults.

    Examples
    --------
    >>> LevelMap().resolve(LogLevel.FATAL)
    <SyslogPriority.ALERT: 1>
    >>> LevelMap.from_mapping({"trace": "debug"})
    Traceback (most recent call last):
    ...
    lib_log_syslog.domain.errors.ConfigurationError: level map is missing entries for: DEBUG, INFO, WARN, ERROR, FATAL
    """

    entries: Mapping[LogLevel, SyslogPriority] = field(default_factory=lambda: DEFAULT_LEVEL_MAP)

    def __post_init__(self) -> None:
        entries: dict[LogLevel, SyslogPriority] = {}
        for level, priority in self.entries.items():
            if not isinstance(level, LogLevel):
                raise ConfigurationError(f"level map keys must be LogLevel members, got {level!r}")
            entries[level] = SyslogPriority.coerce(priority)
        missing = [level.name for level in LogLevel if level not in entries]
        if missing:
            raise ConfigurationError(f"level map is missing entries for: {', '.join(missing)}")
        object.__setattr__(self, "entries", MappingProxyType(entries))

    @classmethod
    def from_mapping(cls, mapping: "LevelMap | LevelMapping | None") -> "LevelMap":
        """Build a map from user configuration, coercing names and codes.

        Two keys naming the same level (``"warn"`` and ``"WARNING"``) are rejected.
        """

        if mapping is None:
            return cls()
        if isinstance(mapping, LevelMap):
            return mapping
        entries: dict[LogLevel, SyslogPriority] = {}
        for key, value in mapping.items():
            level = key if isinstance(key, LogLevel) else LogLevel.from_name(str(key))
            if level in entries:
                raise ConfigurationError(f"level map names {level.name} more than once (key {key!r})")
            entries[level] = SyslogPriority.coerce(value)
        return cls(entries)

    def resolve(self, level: LogLevel) -> SyslogPriority:
        """Return the syslog priority configured for ``level``."""

        return self.entries[level]


__all__ = ["DEFAULT_LEVEL_MAP", "LevelMap"]
