"""Host-side registry delivering events to every accepting dispatcher.

The registry evaluates each dispatcher's ``levels`` and ``classes`` matchers and
calls :meth:`DispatcherPort.log` only for those that accept the event. It calls
``log`` directly from :meth:`DispatchHub.dispatch`, which is one of the frames
the default dispatcher ``call_depth`` accounts for.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from lib_log_syslog.application.ports.dispatcher import DispatcherPort
from lib_log_syslog.domain.events import LogEvent
from lib_log_syslog.domain.matchers import matches


class DispatchHub:
    """Ordered collection of dispatchers receiving host log events.

    Examples
    --------
    >>> hub = DispatchHub()
    >>> hub.dispatchers
    ()
    """

    def __init__(self, dispatchers: Iterable[DispatcherPort] = ()) -> None:
        self._dispatchers: list[DispatcherPort] = list(dispatchers)
        self._lock = threading.Lock()

    @property
    def dispatchers(self) -> tuple[DispatcherPort, ...]:
        """Return a snapshot of the registered dispatchers."""

        with self._lock:
            return tuple(self._dispatchers)

    def register(self, dispatcher: DispatcherPort) -> DispatcherPort:
        """Append ``dispatcher`` and return it for fluent wiring."""

        with self._lock:
            self._dispatchers.append(dispatcher)
        return dispatcher

    def unregister(self, dispatcher: DispatcherPort) -> None:
        """Remove ``dispatcher`` if registered."""

        with self._lock:
            if dispatcher in self._dispatchers:
                self._dispatchers.remove(dispatcher)

    def clear(self) -> None:
        with self._lock:
            self._dispatchers.clear()

    @staticmethod
    def accepts(dispatcher: DispatcherPort, event: LogEvent) -> bool:
        """Return ``True`` when both matchers of ``dispatcher`` accept ``event``."""

        return matches(dispatcher.levels, event.level) and matches(dispatcher.classes, event.source_class)

    def dispatch(self, event: LogEvent) -> int:
        """Deliver ``event`` and return the number of dispatchers that received it.

        A dispatcher failure propagates immediately; dispatchers registered
        after the failing one do not see the event.
        """
        delivered = 0
        for dispatcher in self.dispatchers:
            if not self.accepts(dispatcher, event):
                continue
            dispatcher.log(event)
            delivered += 1
        return delivered


__all__ = ["DispatchHub"]
