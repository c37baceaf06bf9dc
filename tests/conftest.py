from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from typing import Any

import pytest

from lib_log_syslog import config as log_config
from lib_log_syslog.adapters.memory import MemorySyslogBackend
from lib_log_syslog.domain.events import LogEvent
from lib_log_syslog.domain.levels import LogLevel
from lib_log_syslog.lib_log_syslog import DEFAULT_HUB

EventFactory = Callable[[dict[str, Any] | None], LogEvent]

_ENV_VARS = (
    log_config.IDENT_ENV_VAR,
    log_config.FACILITY_ENV_VAR,
    log_config.FORMAT_ENV_VAR,
    log_config.CALL_DEPTH_ENV_VAR,
    log_config.DOTENV_ENV_VAR,
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Strip ``LOG_SYSLOG_*`` variables and empty the default hub around each test."""

    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    DEFAULT_HUB.clear()
    yield
    DEFAULT_HUB.clear()


@pytest.fixture
def event_factory() -> EventFactory:
    def _factory(overrides: dict[str, Any] | None = None) -> LogEvent:
        payload: dict[str, Any] = {
            "level": LogLevel.INFO,
            "source_class": "Foo",
            "message": "hi",
            "timestamp": datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc),
        }
        if overrides:
            payload.update(overrides)
        return LogEvent(**payload)

    return _factory


@pytest.fixture
def sample_event(event_factory: EventFactory) -> LogEvent:
    return event_factory(None)


@pytest.fixture
def memory_backend() -> MemorySyslogBackend:
    return MemorySyslogBackend()
