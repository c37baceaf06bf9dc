"""Port describing a dispatcher as seen by the host framework."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_syslog.domain.events import LogEvent
from lib_log_syslog.domain.matchers import Matcher


@runtime_checkable
class DispatcherPort(Protocol):
    """Receive events that passed the host-evaluated ``levels``/``classes`` matchers."""

    levels: Matcher
    classes: Matcher

    def log(self, event: LogEvent) -> None:
        """Handle ``event``; failures propagate to the caller."""


__all__ = ["DispatcherPort"]
