"""Protocol definitions for the adapters the dispatcher relies on."""

from __future__ import annotations

from .backend import SyslogBackendPort, SyslogHandle
from .caller import CallerContextResolverPort
from .dispatcher import DispatcherPort

__all__ = [
    "CallerContextResolverPort",
    "DispatcherPort",
    "SyslogBackendPort",
    "SyslogHandle",
]
