"""Adapter implementations for the dispatcher ports."""

from __future__ import annotations

from .callers import StackFrameResolver
from .console import RichConsoleBackend
from .memory import MemorySyslogBackend
from .syslog import SocketSyslogBackend, default_address

__all__ = [
    "MemorySyslogBackend",
    "RichConsoleBackend",
    "SocketSyslogBackend",
    "StackFrameResolver",
    "default_address",
]
