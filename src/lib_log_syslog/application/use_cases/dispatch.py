"""Syslog dispatcher orchestrating formatting, level mapping and backend writes.

Purpose
-------
Receive events the host framework already filtered, render them, translate the
host level to a syslog priority, and write the result through a backend handle
that is opened on first use and reused for the dispatcher's lifetime.

Contents
--------
* :class:`DispatcherState` - ``UNINITIALIZED`` / ``ACTIVE``.
* :class:`SyslogDispatcher` - concrete :class:`DispatcherPort`.
* :data:`DEFAULT_TEMPLATE`, :data:`DEFAULT_CALL_DEPTH`.

System Role
-----------
The dispatcher is created once at wiring time and invoked concurrently by the
host. The handle is opened under a per-instance lock so concurrent first calls
open exactly one handle; writes rely on the handle's own serialisation (see
:mod:`lib_log_syslog.application.ports.backend`). Every failure propagates to
the caller of :meth:`SyslogDispatcher.log`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any

from lib_log_syslog.application.ports.backend import SyslogBackendPort, SyslogHandle
from lib_log_syslog.application.ports.caller import CallerContextResolverPort
from lib_log_syslog.application.ports.dispatcher import DispatcherPort
from lib_log_syslog.domain.errors import (
    BackendConnectionError,
    BackendWriteError,
    ConfigurationError,
)
from lib_log_syslog.domain.events import LogEvent
from lib_log_syslog.domain.level_map import LevelMap, LevelMapping
from lib_log_syslog.domain.levels import Facility
from lib_log_syslog.domain.matchers import Matcher

from .format_message import TemplateFormatter

LOGGER = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "[%C - %S] : %M"
DEFAULT_CALL_DEPTH = 4

Diagnostic = Callable[[str, dict[str, Any]], None]


class DispatcherState(Enum):
    """Lifecycle of the dispatcher's backend handle."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


class SyslogDispatcher(DispatcherPort):
    """Forward host log events to a syslog backend.

    Parameters
    ----------
    backend:
        Backend used to open the handle on the first :meth:`log` call.
    ident:
        Program identifier attached to every message.
    facility:
        Syslog facility (member, name or code); defaults to ``LOCAL0``.
    template:
        Format template, see :mod:`lib_log_syslog.domain.template`.
    call_depth:
        Frames between :meth:`TemplateFormatter.render` and the code whose
        method name should appear in ``%S``. The default of ``4`` matches
        ``LoggerProxy`` / ``Loggable`` delivering through a ``DispatchHub``;
        any extra wrapper in that chain requires a larger value.
    level_map:
        Complete host level to syslog priority mapping.
    levels, classes:
        Matchers the host evaluates before delivering an event.
    resolver:
        Caller context resolver used by the formatter. Without one, every
        caller field (``%S``, ``%F``, ``%N``, and ``%C`` for events with an
        empty class) renders ``<unknown>``; :func:`lib_log_syslog.create_dispatcher`
        supplies a stack-frame resolver.
    diagnostic:
        Optional callback receiving ``backend_opened``, ``backend_open_failed``
        and ``write_failed`` milestones.

    Raises
    ------
    ConfigurationError
        For an empty ident, an unknown facility, a non-string template, an
        invalid call depth, or an incomplete level map.
    """

    def __init__(
        self,
        backend: SyslogBackendPort,
        *,
        ident: str,
        facility: Facility | str | int = Facility.LOCAL0,
        template: str = DEFAULT_TEMPLATE,
        call_depth: int = DEFAULT_CALL_DEPTH,
        level_map: LevelMap | LevelMapping | None = None,
        levels: Matcher = None,
        classes: Matcher = None,
        resolver: CallerContextResolverPort | None = None,
        diagnostic: Diagnostic | None = None,
    ) -> None:
        if not isinstance(ident, str) or not ident.strip():
            raise ConfigurationError("ident must be a non-empty string")
        if not isinstance(template, str):
            raise ConfigurationError(f"template must be a string, got {type(template).__name__}")
        if isinstance(call_depth, bool) or not isinstance(call_depth, int) or call_depth < 0:
            raise ConfigurationError(f"call_depth must be a non-negative integer, got {call_depth!r}")

        self._backend = backend
        self._ident = ident
        self._facility = Facility.coerce(facility)
        self._template = template
        self._call_depth = call_depth
        self._level_map = LevelMap.from_mapping(level_map)
        self._formatter = TemplateFormatter(resolver)
        self._diagnostic = diagnostic
        self.levels = levels
        self.classes = classes

        self._handle: SyslogHandle | None = None
        self._handle_lock = threading.Lock()

    @property
    def ident(self) -> str:
        return self._ident

    @property
    def facility(self) -> Facility:
        return self._facility

    @property
    def template(self) -> str:
        return self._template

    @property
    def call_depth(self) -> int:
        return self._call_depth

    @property
    def level_map(self) -> LevelMap:
        return self._level_map

    @property
    def state(self) -> DispatcherState:
        """Return ``ACTIVE`` once a backend handle has been opened."""

        return DispatcherState.UNINITIALIZED if self._handle is None else DispatcherState.ACTIVE

    @property
    def handle(self) -> SyslogHandle | None:
        """Return the opened backend handle, or ``None`` before the first successful :meth:`log`."""

        return self._handle

    def log(self, event: LogEvent) -> None:
        """Render ``event`` and write it to the backend.

        The host has already applied :attr:`levels` and :attr:`classes`; the
        dispatcher does not filter again.

        Raises
        ------
        BackendConnectionError
            When the handle cannot be opened. The dispatcher stays
            ``UNINITIALIZED`` and the next call tries again.
        BackendWriteError
            When the write fails. The event is not retried.
        """
        handle = self._handle
        if handle is None:
            handle = self._open_handle()

        text = self._formatter.render(self._template, event, self._call_depth)
        priority = self._level_map.resolve(event.level)
        try:
            handle.write(priority, text)
        except BackendWriteError as exc:
            self._emit_diagnostic("write_failed", {"priority": priority.syslog_name, "error": str(exc)})
            raise
        except Exception as exc:
            self._emit_diagnostic("write_failed", {"priority": priority.syslog_name, "error": str(exc)})
            raise BackendWriteError(f"syslog write failed: {exc}") from exc

    def _open_handle(self) -> SyslogHandle:
        """Open the backend handle once, even under concurrent first calls."""

        with self._handle_lock:
            if self._handle is not None:
                return self._handle
            payload = {"ident": self._ident, "facility": self._facility.name}
            try:
                handle = self._backend.open(self._ident, self._facility)
            except BackendConnectionError as exc:
                LOGGER.debug("Opening syslog backend failed: %s", exc)
                self._emit_diagnostic("backend_open_failed", {**payload, "error": str(exc)})
                raise
            except Exception as exc:
                LOGGER.debug("Opening syslog backend failed: %s", exc)
                self._emit_diagnostic("backend_open_failed", {**payload, "error": str(exc)})
                raise BackendConnectionError(f"cannot open syslog backend: {exc}") from exc
            self._handle = handle
        LOGGER.debug("Opened syslog backend ident=%s facility=%s", self._ident, self._facility.name)
        self._emit_diagnostic("backend_opened", payload)
        return handle

    def _emit_diagnostic(self, name: str, payload: dict[str, Any]) -> None:
        if self._diagnostic is not None:
            self._diagnostic(name, payload)


__all__ = ["DEFAULT_CALL_DEPTH", "DEFAULT_TEMPLATE", "DispatcherState", "SyslogDispatcher"]
