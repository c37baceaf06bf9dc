"""Rich-powered console backend printing syslog-style lines.

Purpose
-------
Show exactly what a dispatcher would send to syslog, styled per priority, for
the CLI and for local development without a syslog daemon.

Contents
--------
* :data:`_STYLE_MAP` - default priority-to-style mapping.
* :class:`RichConsoleHandle` / :class:`RichConsoleBackend`.
"""

from __future__ import annotations

import threading
from typing import Mapping

from rich.console import Console

from lib_log_syslog.application.ports.backend import SyslogBackendPort, SyslogHandle
from lib_log_syslog.domain.levels import Facility, SyslogPriority

_STYLE_MAP: Mapping[SyslogPriority, str] = {
    SyslogPriority.EMERGENCY: "bold white on red",
    SyslogPriority.ALERT: "bold red",
    SyslogPriority.CRITICAL: "bold red",
    SyslogPriority.ERROR: "red",
    SyslogPriority.WARNING: "yellow",
    SyslogPriority.NOTICE: "green",
    SyslogPriority.INFO: "cyan",
    SyslogPriority.DEBUG: "dim",
}

#: Default Rich styles keyed by :class:`SyslogPriority`.


class RichConsoleHandle(SyslogHandle):
    """Print ``facility.priority ident: message`` lines to a Rich console."""

    def __init__(
        self,
        console: Console,
        ident: str,
        facility: Facility,
        styles: Mapping[SyslogPriority, str],
        *,
        colorize: bool,
    ) -> None:
        self._console = console
        self._ident = ident
        self._facility = facility
        self._styles = styles
        self._colorize = colorize
        self._lock = threading.Lock()

    def write(self, priority: SyslogPriority, message: str) -> None:
        """Print ``message`` styled for ``priority``.

        Examples
        --------
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> handle = RichConsoleBackend(console=console).open("app", Facility.LOCAL0)
        >>> handle.write(SyslogPriority.ERROR, "boom")
        >>> console.export_text()
        'local0.err app: boom\\n'
        """
        style = self._styles.get(priority, "") if self._colorize else ""
        line = self.format_line(priority, message)
        with self._lock:
            self._console.print(line, style=style, highlight=False, markup=False)

    def format_line(self, priority: SyslogPriority, message: str) -> str:
        return f"{self._facility.name.lower()}.{priority.syslog_name} {self._ident}: {message}"


class RichConsoleBackend(SyslogBackendPort):
    """Open console handles sharing one Rich :class:`Console`."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[SyslogPriority | str, str] | None = None,
    ) -> None:
        self._console = console if console is not None else Console(force_terminal=force_color, no_color=no_color)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            merged[SyslogPriority.coerce(key)] = value
        self._styles = merged

    def open(self, ident: str, facility: Facility) -> RichConsoleHandle:
        return RichConsoleHandle(self._console, ident, facility, self._styles, colorize=not self._no_color)


__all__ = ["RichConsoleBackend", "RichConsoleHandle"]
