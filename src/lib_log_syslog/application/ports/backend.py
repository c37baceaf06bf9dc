"""Backend port describing the syslog transport the dispatcher writes to.

Purpose
-------
Keep the dispatcher independent of sockets, the journal, or test doubles. A
backend opens handles; a handle accepts ``(priority, message)`` pairs.

Contents
--------
* :class:`SyslogHandle` - an opened connection.
* :class:`SyslogBackendPort` - factory for handles.

System Role
-----------
The dispatcher calls :meth:`SyslogBackendPort.open` once and writes through
the returned handle from any thread. Handles must therefore serialise writes
themselves when the underlying transport is not safe for concurrent use.
Failures are reported with :class:`~lib_log_syslog.domain.errors.BackendConnectionError`
and :class:`~lib_log_syslog.domain.errors.BackendWriteError`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_syslog.domain.levels import Facility, SyslogPriority


@runtime_checkable
class SyslogHandle(Protocol):
    """An opened connection to a syslog backend."""

    def write(self, priority: SyslogPriority, message: str) -> None:
        """Deliver ``message`` with ``priority``; raise on failure."""


@runtime_checkable
class SyslogBackendPort(Protocol):
    """Open connections to a syslog backend."""

    def open(self, ident: str, facility: Facility) -> SyslogHandle:
        """Return a fresh handle tagged with ``ident`` and routed to ``facility``."""


__all__ = ["SyslogBackendPort", "SyslogHandle"]
