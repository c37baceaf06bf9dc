"""In-process syslog backend recording every write.

Useful for host test suites and dry runs: each :meth:`MemorySyslogBackend.open`
returns a new :class:`MemoryHandle`, so handle identity and open counts are
observable.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from lib_log_syslog.application.ports.backend import SyslogBackendPort, SyslogHandle
from lib_log_syslog.domain.errors import BackendWriteError
from lib_log_syslog.domain.levels import Facility, SyslogPriority


@dataclass(slots=True, frozen=True)
class MemoryRecord:
    """Single message captured by a :class:`MemoryHandle`."""

    ident: str
    facility: Facility
    priority: SyslogPriority
    message: str


class MemoryHandle(SyslogHandle):
    """Thread-safe list of written records."""

    def __init__(self, ident: str, facility: Facility) -> None:
        self.ident = ident
        self.facility = facility
        self._records: list[MemoryRecord] = []
        self._lock = threading.Lock()
        self._closed = False

    @property
    def records(self) -> tuple[MemoryRecord, ...]:
        with self._lock:
            return tuple(self._records)

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, priority: SyslogPriority, message: str) -> None:
        with self._lock:
            if self._closed:
                raise BackendWriteError("memory handle is closed")
            self._records.append(MemoryRecord(self.ident, self.facility, priority, message))

    def close(self) -> None:
        with self._lock:
            self._closed = True


class MemorySyslogBackend(SyslogBackendPort):
    """Backend handing out :class:`MemoryHandle` instances.

    Examples
    --------
    >>> backend = MemorySyslogBackend()
    >>> handle = backend.open("app", Facility.LOCAL0)
    >>> handle.write(SyslogPriority.INFO, "ready")
    >>> backend.records[0].message
    'ready'
    """

    def __init__(self) -> None:
        self._handles: list[MemoryHandle] = []
        self._lock = threading.Lock()

    def open(self, ident: str, facility: Facility) -> MemoryHandle:
        handle = MemoryHandle(ident, facility)
        with self._lock:
            self._handles.append(handle)
        return handle

    @property
    def handles(self) -> tuple[MemoryHandle, ...]:
        with self._lock:
            return tuple(self._handles)

    @property
    def open_count(self) -> int:
        return len(self.handles)

    @property
    def records(self) -> list[MemoryRecord]:
        """Return the records of every handle in open order."""

        return [record for handle in self.handles for record in handle.records]


__all__ = ["MemoryHandle", "MemoryRecord", "MemorySyslogBackend"]
