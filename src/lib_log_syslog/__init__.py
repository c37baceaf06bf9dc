"""Syslog dispatcher for structured host logging frameworks.

Build a dispatcher with :func:`create_dispatcher`, add it to a hub with
:func:`register`, and emit events through :func:`get` or the :class:`Loggable`
mixin.
"""

from __future__ import annotations

from .application.use_cases import DispatchHub, DispatcherState, SyslogDispatcher, TemplateFormatter
from .domain import (
    BackendConnectionError,
    BackendError,
    BackendWriteError,
    ConfigurationError,
    Facility,
    LevelMap,
    LogEvent,
    LogLevel,
    LogSyslogError,
    SyslogPriority,
    at_least,
    at_most,
)
from .lib_log_syslog import (
    DEFAULT_HUB,
    Loggable,
    LoggerProxy,
    create_dispatcher,
    dispatchers,
    get,
    register,
    summary_info,
    unregister,
)

__all__ = [
    "BackendConnectionError",
    "BackendError",
    "BackendWriteError",
    "ConfigurationError",
    "DEFAULT_HUB",
    "DispatchHub",
    "DispatcherState",
    "Facility",
    "LevelMap",
    "LogEvent",
    "LogLevel",
    "LogSyslogError",
    "Loggable",
    "LoggerProxy",
    "SyslogDispatcher",
    "SyslogPriority",
    "TemplateFormatter",
    "at_least",
    "at_most",
    "create_dispatcher",
    "dispatchers",
    "get",
    "register",
    "summary_info",
    "unregister",
]
