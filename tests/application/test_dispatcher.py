from __future__ import annotations

import threading
import time
from typing import Any

import pytest

from lib_log_syslog.adapters.callers import StackFrameResolver
from lib_log_syslog.adapters.memory import MemoryHandle, MemorySyslogBackend
from lib_log_syslog.application.ports.dispatcher import DispatcherPort
from lib_log_syslog.application.use_cases.dispatch import DispatcherState, SyslogDispatcher
from lib_log_syslog.domain.errors import (
    BackendConnectionError,
    BackendWriteError,
    ConfigurationError,
)
from lib_log_syslog.domain.events import LogEvent
from lib_log_syslog.domain.level_map import LevelMap
from lib_log_syslog.domain.levels import Facility, LogLevel, SyslogPriority
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def _dispatcher(backend: Any, **options: Any) -> SyslogDispatcher:
    options.setdefault("ident", "tests")
    options.setdefault("resolver", StackFrameResolver())
    return SyslogDispatcher(backend, **options)


def bar(dispatcher: SyslogDispatcher, event: LogEvent) -> None:
    dispatcher.log(event)


class _SlowBackend(MemorySyslogBackend):
    """Memory backend whose ``open`` takes long enough for callers to pile up."""

    def __init__(self, delay: float = 0.05) -> None:
        super().__init__()
        self.delay = delay
        self.open_calls = 0
        self._calls_lock = threading.Lock()

    def open(self, ident: str, facility: Facility) -> MemoryHandle:
        with self._calls_lock:
            self.open_calls += 1
        time.sleep(self.delay)
        return super().open(ident, facility)


class _FlakyBackend(MemorySyslogBackend):
    def __init__(self, failures: int, error: Exception) -> None:
        super().__init__()
        self.failures = failures
        self.error = error
        self.attempts = 0

    def open(self, ident: str, facility: Facility) -> MemoryHandle:
        self.attempts += 1
        if self.attempts <= self.failures:
            raise self.error
        return super().open(ident, facility)


class _BrokenHandle:
    def __init__(self, error: Exception) -> None:
        self.error = error
        self.writes = 0

    def write(self, priority: SyslogPriority, message: str) -> None:
        self.writes += 1
        raise self.error


class _BrokenWriteBackend:
    def __init__(self, error: Exception) -> None:
        self.handle = _BrokenHandle(error)

    def open(self, ident: str, facility: Facility) -> _BrokenHandle:
        return self.handle


def test_log_writes_rendered_text_with_mapped_priority(memory_backend: MemorySyslogBackend, event_factory) -> None:
    dispatcher = _dispatcher(memory_backend, call_depth=2)

    bar(dispatcher, event_factory({"level": LogLevel.WARN}))

    [record] = memory_backend.records
    assert record.message == "[Foo - bar] : hi"
    assert record.priority is SyslogPriority.WARNING
    assert record.ident == "tests"
    assert record.facility is Facility.LOCAL0


@pytest.mark.parametrize(
    "level, priority",
    [
        (LogLevel.TRACE, SyslogPriority.DEBUG),
        (LogLevel.DEBUG, SyslogPriority.DEBUG),
        (LogLevel.INFO, SyslogPriority.INFO),
        (LogLevel.WARN, SyslogPriority.WARNING),
        (LogLevel.ERROR, SyslogPriority.ERROR),
        (LogLevel.FATAL, SyslogPriority.ALERT),
    ],
)
def test_default_level_map_applies_to_writes(
    memory_backend: MemorySyslogBackend, event_factory, level: LogLevel, priority: SyslogPriority
) -> None:
    dispatcher = _dispatcher(memory_backend, template="%M")

    dispatcher.log(event_factory({"level": level}))

    assert memory_backend.records[0].priority is priority


def test_custom_level_map_and_facility_are_used(memory_backend: MemorySyslogBackend, sample_event: LogEvent) -> None:
    level_map = {level: "notice" for level in LogLevel}
    dispatcher = _dispatcher(memory_backend, facility="daemon", level_map=level_map, ident="svc")

    dispatcher.log(sample_event)

    [handle] = memory_backend.handles
    assert handle.ident == "svc"
    assert handle.facility is Facility.DAEMON
    assert handle.records[0].priority is SyslogPriority.NOTICE


def test_handle_is_opened_lazily_and_reused(memory_backend: MemorySyslogBackend, sample_event: LogEvent) -> None:
    dispatcher = _dispatcher(memory_backend)

    assert dispatcher.state is DispatcherState.UNINITIALIZED
    assert dispatcher.handle is None
    assert memory_backend.open_count == 0

    dispatcher.log(sample_event)
    first = dispatcher.handle
    dispatcher.log(sample_event)
    dispatcher.log(sample_event)

    assert dispatcher.state is DispatcherState.ACTIVE
    assert dispatcher.handle is first
    assert memory_backend.open_count == 1
    assert len(memory_backend.records) == 3


def test_concurrent_first_calls_open_exactly_one_handle(sample_event: LogEvent) -> None:
    backend = _SlowBackend()
    dispatcher = _dispatcher(backend, template="%M")
    workers = 8
    barrier = threading.Barrier(workers)
    errors: list[BaseException] = []

    def worker() -> None:
        barrier.wait()
        try:
            dispatcher.log(sample_event)
        except BaseException as exc:  # pragma: no cover - surfaced by the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert errors == []
    assert backend.open_calls == 1
    [handle] = backend.handles
    assert len(handle.records) == workers


def test_open_failure_propagates_and_next_call_retries(sample_event: LogEvent) -> None:
    backend = _FlakyBackend(failures=1, error=BackendConnectionError("daemon down"))
    dispatcher = _dispatcher(backend, template="%M")

    with pytest.raises(BackendConnectionError, match="daemon down"):
        dispatcher.log(sample_event)

    assert dispatcher.state is DispatcherState.UNINITIALIZED
    assert backend.records == []

    dispatcher.log(sample_event)

    assert backend.attempts == 2
    assert dispatcher.state is DispatcherState.ACTIVE
    assert [record.message for record in backend.records] == ["hi"]


def test_foreign_open_errors_are_wrapped(sample_event: LogEvent) -> None:
    cause = OSError("no such socket")
    dispatcher = _dispatcher(_FlakyBackend(failures=1, error=cause))

    with pytest.raises(BackendConnectionError) as excinfo:
        dispatcher.log(sample_event)

    assert excinfo.value.__cause__ is cause


def test_write_failure_propagates_without_retry(sample_event: LogEvent) -> None:
    backend = _BrokenWriteBackend(BackendWriteError("disk full"))
    dispatcher = _dispatcher(backend)

    with pytest.raises(BackendWriteError, match="disk full"):
        dispatcher.log(sample_event)

    assert backend.handle.writes == 1
    assert dispatcher.state is DispatcherState.ACTIVE


def test_foreign_write_errors_are_wrapped(sample_event: LogEvent) -> None:
    cause = ConnectionResetError("peer went away")
    dispatcher = _dispatcher(_BrokenWriteBackend(cause))

    with pytest.raises(BackendWriteError) as excinfo:
        dispatcher.log(sample_event)

    assert excinfo.value.__cause__ is cause


def test_independent_dispatchers_never_share_handles(memory_backend: MemorySyslogBackend, sample_event: LogEvent) -> None:
    first = _dispatcher(memory_backend)
    second = _dispatcher(memory_backend)

    first.log(sample_event)
    second.log(sample_event)

    assert first.handle is not None and second.handle is not None
    assert first.handle is not second.handle
    assert memory_backend.open_count == 2


def test_dispatcher_does_not_refilter(memory_backend: MemorySyslogBackend, sample_event: LogEvent) -> None:
    dispatcher = _dispatcher(memory_backend, levels=LogLevel.FATAL, classes="Other")

    dispatcher.log(sample_event)

    assert len(memory_backend.records) == 1


def test_diagnostic_hook_receives_milestones(sample_event: LogEvent) -> None:
    seen: list[tuple[str, dict[str, Any]]] = []
    backend = _FlakyBackend(failures=1, error=BackendConnectionError("down"))
    dispatcher = _dispatcher(backend, diagnostic=lambda name, payload: seen.append((name, payload)))

    with pytest.raises(BackendConnectionError):
        dispatcher.log(sample_event)
    dispatcher.log(sample_event)

    assert [name for name, _ in seen] == ["backend_open_failed", "backend_opened"]
    assert seen[1][1] == {"ident": "tests", "facility": "LOCAL0"}


def test_dispatcher_satisfies_port(memory_backend: MemorySyslogBackend) -> None:
    assert isinstance(_dispatcher(memory_backend), DispatcherPort)


@pytest.mark.parametrize(
    "options, match",
    [
        ({"level_map": {LogLevel.INFO: SyslogPriority.INFO}}, "missing entries"),
        ({"level_map": {level: None for level in LogLevel}}, "priority"),
        ({"facility": "local42"}, "facility"),
        ({"call_depth": -1}, "call_depth"),
        ({"call_depth": True}, "call_depth"),
        ({"call_depth": "4"}, "call_depth"),
        ({"ident": ""}, "ident"),
        ({"template": None}, "template"),
    ],
)
def test_invalid_configuration_fails_at_construction(
    memory_backend: MemorySyslogBackend, options: dict[str, Any], match: str
) -> None:
    with pytest.raises(ConfigurationError, match=match):
        _dispatcher(memory_backend, **options)

    assert memory_backend.open_count == 0


def test_configuration_is_exposed_read_only(memory_backend: MemorySyslogBackend) -> None:
    dispatcher = _dispatcher(memory_backend, facility=Facility.USER, call_depth=6, template="%M")

    assert dispatcher.ident == "tests"
    assert dispatcher.facility is Facility.USER
    assert dispatcher.call_depth == 6
    assert dispatcher.template == "%M"
    assert dispatcher.level_map.resolve(LogLevel.FATAL) is SyslogPriority.ALERT


def test_invalid_prebuilt_level_map_never_reaches_the_backend(memory_backend: MemorySyslogBackend) -> None:
    with pytest.raises(ConfigurationError, match="priority"):
        _dispatcher(memory_backend, level_map=LevelMap({level: "bogus" for level in LogLevel}))  # type: ignore[misc]

    assert memory_backend.records == []


def test_write_failure_with_custom_map_reports_mapped_priority(sample_event: LogEvent) -> None:
    seen: list[tuple[str, dict[str, Any]]] = []
    dispatcher = _dispatcher(
        _BrokenWriteBackend(OSError("socket closed")),
        level_map={level: "crit" for level in LogLevel},
        diagnostic=lambda name, payload: seen.append((name, payload)),
    )

    with pytest.raises(BackendWriteError, match="socket closed"):
        dispatcher.log(sample_event)

    assert seen[-1] == ("write_failed", {"priority": "crit", "error": "socket closed"})


def test_dispatcher_without_resolver_renders_unknown_caller(
    memory_backend: MemorySyslogBackend, sample_event: LogEvent
) -> None:
    dispatcher = SyslogDispatcher(memory_backend, ident="tests")

    bar(dispatcher, sample_event)

    assert memory_backend.records[0].message == "[Foo - <unknown>] : hi"
