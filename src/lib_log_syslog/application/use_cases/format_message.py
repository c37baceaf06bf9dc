"""Render dispatcher templates against a log event and its caller context.

Purpose
-------
Turn a format template such as ``"[%C - %S] : %M"`` into the line written to
syslog. Field values come from the :class:`LogEvent` and, for the caller
tokens, from a :class:`CallerContextResolverPort`.

Contents
--------
* :class:`TemplateFormatter` - renders templates; owns no I/O.

System Role
-----------
Invoked by :class:`~lib_log_syslog.application.use_cases.dispatch.SyslogDispatcher`
for every event. ``call_depth`` counts frames outward from :meth:`TemplateFormatter.render`,
so the resolver must be called from ``render`` itself and not from a helper.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from lib_log_syslog.application.ports.caller import CallerContextResolverPort
from lib_log_syslog.domain.caller import UNKNOWN, CallerContext
from lib_log_syslog.domain.errors import ConfigurationError
from lib_log_syslog.domain.events import LogEvent
from lib_log_syslog.domain.template import CALLER_TOKENS, placeholders_in, substitute


class TemplateFormatter:
    """Render format templates for log events.

    Parameters
    ----------
    resolver:
        Source of caller context for ``%S``, ``%F`` and ``%N`` (and ``%C`` when
        the event carries no class). Without a resolver those fields render as
        ``<unknown>``.
    pid_provider:
        Callable returning the process id used for ``%P``.
    """

    def __init__(
        self,
        resolver: CallerContextResolverPort | None = None,
        *,
        pid_provider: Callable[[], int] = os.getpid,
    ) -> None:
        self._resolver = resolver
        self._pid_provider = pid_provider

    def render(self, template: str, event: LogEvent, call_depth: int) -> str:
        """Return ``template`` with every recognised placeholder substituted.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from lib_log_syslog.domain.levels import LogLevel
        >>> event = LogEvent(LogLevel.INFO, "Foo", "hi", datetime(2025, 1, 1, tzinfo=timezone.utc))
        >>> TemplateFormatter().render("%L %C: %M", event, 4)
        'INFO Foo: hi'
        >>> TemplateFormatter().render("", event, 4)
        ''
        """
        if call_depth < 0:
            raise ConfigurationError(f"call_depth must be non-negative, got {call_depth}")
        if "%" not in template:
            return template

        used = placeholders_in(template)
        caller = CallerContext.unknown()
        needs_caller = bool(used & CALLER_TOKENS) or ("C" in used and not event.source_class)
        if needs_caller and self._resolver is not None:
            caller = self._resolver.resolve(call_depth)

        fields = {
            "class_name": event.source_class or caller.class_name or UNKNOWN,
            "subroutine": caller.subroutine,
            "message": event.message,
            "filename": caller.filename,
            "lineno": caller.line,
            "level": event.level.name,
            "timestamp": event.timestamp.isoformat(),
            "pid": str(self._pid_provider()),
        }
        return substitute(template, fields)


__all__ = ["TemplateFormatter"]
