"""Socket syslog backend built on :class:`logging.handlers.SysLogHandler`.

Purpose
-------
Deliver rendered lines to the local syslog daemon (``/dev/log`` on Linux,
``/var/run/syslog`` on macOS) or to a remote collector over UDP/TCP.

Contents
--------
* :func:`default_address` - platform default socket address.
* :class:`SocketSyslogHandle` - one open socket; implements :class:`SyslogHandle`.
* :class:`SocketSyslogBackend` - implements :class:`SyslogBackendPort`.

System Role
-----------
Each :meth:`SocketSyslogBackend.open` creates its own handler and socket, so
two dispatchers never share a connection. Writes go through
:meth:`logging.Handler.handle`, which holds the handler lock around ``emit``;
concurrent writers therefore never interleave datagrams on one socket. Unlike
the stdlib handler, errors are raised instead of being printed to ``stderr``.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import socket
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, Union

from lib_log_syslog.application.ports.backend import SyslogBackendPort, SyslogHandle
from lib_log_syslog.domain.errors import BackendConnectionError, BackendWriteError
from lib_log_syslog.domain.levels import Facility, SyslogPriority

Address = Union[str, tuple[str, int]]

_UNIX_SOCKETS = ("/dev/log", "/var/run/syslog", "/var/run/log")


def default_address() -> Address:
    """Return the first local syslog socket that exists, else UDP ``localhost:514``."""

    for candidate in _UNIX_SOCKETS:
        if Path(candidate).exists():
            return candidate
    return ("localhost", logging.handlers.SYSLOG_UDP_PORT)


class _PrioritySysLogHandler(logging.handlers.SysLogHandler):
    """SysLogHandler that takes the priority keyword from the record and raises on errors."""

    def mapPriority(self, levelName: str) -> str:  # noqa: N802 - stdlib override
        return levelName

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802 - stdlib override
        exc = sys.exc_info()[1]
        raise BackendWriteError(f"syslog write to {self.address!r} failed: {exc}") from exc


HandlerFactory = Callable[..., logging.handlers.SysLogHandler]


class SocketSyslogHandle(SyslogHandle):
    """Open syslog socket tagged with an ident and a facility.

    The ``ident[pid]: `` prefix is built on every write so a forked child
    reports its own process id.
    """

    def __init__(self, handler: logging.handlers.SysLogHandler, ident: str, facility: Facility) -> None:
        self._handler = handler
        self._ident = ident
        self._facility = facility

    @property
    def handler(self) -> logging.handlers.SysLogHandler:
        return self._handler

    @property
    def ident(self) -> str:
        return self._ident

    @property
    def facility(self) -> Facility:
        return self._facility

    def write(self, priority: SyslogPriority, message: str) -> None:
        """Send ``message`` as one syslog record with ``priority``."""
        prefixed = f"{self._ident}[{os.getpid()}]: {message}"
        record = logging.makeLogRecord({"msg": prefixed, "levelname": priority.syslog_name})
        self._handler.handle(record)

    def close(self) -> None:
        self._handler.close()


class SocketSyslogBackend(SyslogBackendPort):
    """Open :class:`SocketSyslogHandle` instances against ``address``.

    Parameters
    ----------
    address:
        Unix socket path or ``(host, port)``; defaults to :func:`default_address`.
    socktype:
        ``socket.SOCK_DGRAM`` or ``socket.SOCK_STREAM`` for network addresses.
    handler_factory:
        Builds the underlying handler; tests substitute their own.
    """

    def __init__(
        self,
        *,
        address: Address | None = None,
        socktype: int | None = None,
        handler_factory: HandlerFactory | None = None,
    ) -> None:
        self._address = address if address is not None else default_address()
        self._socktype = socktype
        self._handler_factory = handler_factory or _PrioritySysLogHandler

    @property
    def address(self) -> Address:
        return self._address

    def open(self, ident: str, facility: Facility) -> SocketSyslogHandle:
        """Connect a new socket; raise :class:`BackendConnectionError` when unreachable."""

        kwargs: dict[str, Any] = {"address": self._address, "facility": int(facility)}
        if self._socktype is not None:
            kwargs["socktype"] = self._socktype
        try:
            handler = self._handler_factory(**kwargs)
        except OSError as exc:
            raise BackendConnectionError(f"cannot connect to syslog at {self._address!r}: {exc}") from exc
        if not _is_connected(handler):
            handler.close()
            raise BackendConnectionError(f"cannot connect to syslog at {self._address!r}")
        return SocketSyslogHandle(handler, ident, facility)


def _is_connected(handler: logging.handlers.SysLogHandler) -> bool:
    """Return ``False`` when the handler swallowed a connection failure during init."""

    sock: socket.socket | None = getattr(handler, "socket", None)
    return sock is not None and sock.fileno() != -1


__all__ = ["SocketSyslogBackend", "SocketSyslogHandle", "default_address"]
