"""Public façade wiring dispatchers, the default hub, and logger helpers.

Purpose
-------
Offer the small API host code needs: build a syslog dispatcher with sensible
defaults, register it, and emit events from plain functions (``get``) or from
classes (``Loggable``).

Contents
--------
* :func:`create_dispatcher` - composition root for :class:`SyslogDispatcher`.
* :data:`DEFAULT_HUB`, :func:`register`, :func:`unregister`, :func:`dispatchers`.
* :class:`LoggerProxy` and the :class:`Loggable` mixin.
* :func:`summary_info` - metadata banner used by the CLI.

System Role
-----------
The level helpers call :meth:`DispatchHub.dispatch` directly, so the chain
``caller → helper → hub → dispatcher → formatter`` is exactly the four frames
the default ``call_depth`` expects. Wrapping a helper in another function
means passing ``call_depth=5`` (or more) to :func:`create_dispatcher`.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import ClassVar

from . import __init__conf__
from .adapters import SocketSyslogBackend, StackFrameResolver
from .application.ports import CallerContextResolverPort, DispatcherPort, SyslogBackendPort
from .application.use_cases import DispatchHub, SyslogDispatcher
from .application.use_cases.dispatch import Diagnostic
from .config import resolve_settings
from .domain import Facility, LevelMap, LogEvent, LogLevel, Matcher
from .domain.level_map import LevelMapping

Clock = Callable[[], datetime]

DEFAULT_HUB = DispatchHub()
"""Registry used by :func:`get` and :class:`Loggable` unless a hub is supplied."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_dispatcher(
    *,
    ident: str | None = None,
    facility: Facility | str | int | None = None,
    template: str | None = None,
    call_depth: int | None = None,
    level_map: LevelMap | LevelMapping | None = None,
    levels: Matcher = None,
    classes: Matcher = None,
    backend: SyslogBackendPort | None = None,
    resolver: CallerContextResolverPort | None = None,
    diagnostic: Diagnostic | None = None,
) -> SyslogDispatcher:
    """Build a :class:`SyslogDispatcher` from options, environment, and defaults.

    ``ident``, ``facility``, ``template`` and ``call_depth`` fall back to the
    ``LOG_SYSLOG_*`` environment variables and then to the program name,
    ``LOCAL0``, ``"[%C - %S] : %M"`` and ``4``. The backend defaults to the
    local syslog socket and the resolver to stack-frame inspection. Nothing is
    opened until the first :meth:`SyslogDispatcher.log` call.

    Examples
    --------
    >>> from lib_log_syslog.adapters import MemorySyslogBackend
    >>> dispatcher = create_dispatcher(ident="docs", backend=MemorySyslogBackend())
    >>> dispatcher.state.value
    'uninitialized'
    """
    settings = resolve_settings(ident=ident, facility=facility, template=template, call_depth=call_depth)
    return SyslogDispatcher(
        backend if backend is not None else SocketSyslogBackend(),
        ident=settings.ident,
        facility=settings.facility,
        template=settings.template,
        call_depth=settings.call_depth,
        level_map=level_map,
        levels=levels,
        classes=classes,
        resolver=resolver if resolver is not None else StackFrameResolver(),
        diagnostic=diagnostic,
    )


def register(dispatcher: DispatcherPort, *, hub: DispatchHub | None = None) -> DispatcherPort:
    """Add ``dispatcher`` to ``hub`` (default: :data:`DEFAULT_HUB`)."""

    return (hub or DEFAULT_HUB).register(dispatcher)


def unregister(dispatcher: DispatcherPort, *, hub: DispatchHub | None = None) -> None:
    (hub or DEFAULT_HUB).unregister(dispatcher)


def dispatchers(*, hub: DispatchHub | None = None) -> tuple[DispatcherPort, ...]:
    return (hub or DEFAULT_HUB).dispatchers


class LoggerProxy:
    """Emit events for a fixed ``source_class`` through a hub.

    Each level helper returns the number of dispatchers that received the
    event. Dispatcher failures propagate unchanged.
    """

    def __init__(self, source_class: str, *, hub: DispatchHub | None = None, clock: Clock = _utc_now) -> None:
        self._source_class = source_class
        self._hub = hub or DEFAULT_HUB
        self._clock = clock

    @property
    def source_class(self) -> str:
        return self._source_class

    def _event(self, level: LogLevel, message: str) -> LogEvent:
        return LogEvent(level=level, source_class=self._source_class, message=message, timestamp=self._clock())

    def trace(self, message: str) -> int:
        return self._hub.dispatch(self._event(LogLevel.TRACE, message))

    def debug(self, message: str) -> int:
        return self._hub.dispatch(self._event(LogLevel.DEBUG, message))

    def info(self, message: str) -> int:
        return self._hub.dispatch(self._event(LogLevel.INFO, message))

    def warn(self, message: str) -> int:
        return self._hub.dispatch(self._event(LogLevel.WARN, message))

    def error(self, message: str) -> int:
        return self._hub.dispatch(self._event(LogLevel.ERROR, message))

    def fatal(self, message: str) -> int:
        return self._hub.dispatch(self._event(LogLevel.FATAL, message))

    def log(self, level: LogLevel, message: str) -> int:
        return self._hub.dispatch(self._event(level, message))


def get(source_class: str, *, hub: DispatchHub | None = None) -> LoggerProxy:
    """Return a :class:`LoggerProxy` bound to ``source_class``."""

    return LoggerProxy(source_class, hub=hub)


class Loggable:
    """Mixin giving a class ``log_<level>`` methods tagged with its own name.

    Examples
    --------
    >>> from lib_log_syslog.adapters import MemorySyslogBackend
    >>> hub = DispatchHub()
    >>> backend = MemorySyslogBackend()
    >>> _ = hub.register(create_dispatcher(ident="docs", backend=backend))
    >>> class Worker(Loggable):
    ...     log_hub = hub
    ...     def start(self):
    ...         self.log_info("starting")
    >>> Worker().start()
    >>> backend.records[0].message
    '[Worker - start] : starting'
    """

    log_hub: ClassVar[DispatchHub | None] = None
    log_clock: ClassVar[Clock] = staticmethod(_utc_now)

    def _log_event(self, level: LogLevel, message: str) -> LogEvent:
        return LogEvent(level=level, source_class=type(self).__name__, message=message, timestamp=self.log_clock())

    def _log_target(self) -> DispatchHub:
        return self.log_hub or DEFAULT_HUB

    def log_trace(self, message: str) -> None:
        self._log_target().dispatch(self._log_event(LogLevel.TRACE, message))

    def log_debug(self, message: str) -> None:
        self._log_target().dispatch(self._log_event(LogLevel.DEBUG, message))

    def log_info(self, message: str) -> None:
        self._log_target().dispatch(self._log_event(LogLevel.INFO, message))

    def log_warn(self, message: str) -> None:
        self._log_target().dispatch(self._log_event(LogLevel.WARN, message))

    def log_error(self, message: str) -> None:
        self._log_target().dispatch(self._log_event(LogLevel.ERROR, message))

    def log_fatal(self, message: str) -> None:
        self._log_target().dispatch(self._log_event(LogLevel.FATAL, message))


def summary_info() -> str:
    """Return the metadata banner printed by the CLI ``info`` command."""

    lines = [f"Info for {__init__conf__.name}:", "", *__init__conf__.info_lines()]
    return "\n".join(lines) + "\n"


__all__ = [
    "DEFAULT_HUB",
    "Loggable",
    "LoggerProxy",
    "create_dispatcher",
    "dispatchers",
    "get",
    "register",
    "summary_info",
    "unregister",
]
