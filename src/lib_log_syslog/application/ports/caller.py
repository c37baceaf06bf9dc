"""Port for resolving the code location that emitted a log event."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_syslog.domain.caller import CallerContext


@runtime_checkable
class CallerContextResolverPort(Protocol):
    """Return the caller context ``depth`` frames out from the invoking frame.

    Depth ``0`` is the frame that called :meth:`resolve`. When the stack is
    shallower than ``depth`` the resolver returns :meth:`CallerContext.unknown`.
    """

    def resolve(self, depth: int) -> CallerContext: ...


__all__ = ["CallerContextResolverPort"]
