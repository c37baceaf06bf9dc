from __future__ import annotations

import pytest

from lib_log_syslog.adapters.callers import StackFrameResolver
from lib_log_syslog.application.use_cases.format_message import TemplateFormatter
from lib_log_syslog.domain.caller import UNKNOWN, CallerContext
from lib_log_syslog.domain.errors import ConfigurationError
from lib_log_syslog.domain.events import LogEvent
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


class _FixedResolver:
    def __init__(self, context: CallerContext) -> None:
        self.context = context
        self.depths: list[int] = []

    def resolve(self, depth: int) -> CallerContext:
        self.depths.append(depth)
        return self.context


def bar(formatter: TemplateFormatter, event: LogEvent, template: str = "[%C - %S] : %M") -> str:
    return formatter.render(template, event, 1)


def test_default_template_renders_class_subroutine_and_message(sample_event: LogEvent) -> None:
    formatter = TemplateFormatter(StackFrameResolver())

    assert bar(formatter, sample_event) == "[Foo - bar] : hi"


def test_empty_template_renders_empty_string(sample_event: LogEvent) -> None:
    assert TemplateFormatter(StackFrameResolver()).render("", sample_event, 4) == ""


def test_template_without_placeholders_is_returned_verbatim(sample_event: LogEvent) -> None:
    resolver = _FixedResolver(CallerContext.unknown())

    assert TemplateFormatter(resolver).render("no placeholders", sample_event, 4) == "no placeholders"
    assert resolver.depths == []


def test_resolver_receives_configured_depth(sample_event: LogEvent) -> None:
    resolver = _FixedResolver(CallerContext("Owner", "bar", "app.py", 7))

    rendered = TemplateFormatter(resolver).render("%S@%F:%N", sample_event, 6)

    assert rendered == "bar@app.py:7"
    assert resolver.depths == [6]


def test_resolver_is_skipped_when_no_caller_tokens_are_used(sample_event: LogEvent) -> None:
    resolver = _FixedResolver(CallerContext.unknown())

    TemplateFormatter(resolver).render("%L %C %M", sample_event, 4)

    assert resolver.depths == []


def test_event_class_wins_over_frame_class(sample_event: LogEvent) -> None:
    resolver = _FixedResolver(CallerContext("FrameClass", "bar", "app.py", 1))

    assert TemplateFormatter(resolver).render("%C", sample_event, 4) == "Foo"


def test_missing_event_class_falls_back_to_frame_class(sample_event: LogEvent) -> None:
    class Worker:
        def run(self, formatter: TemplateFormatter) -> str:
            return formatter.render("%C.%S", sample_event.replace(source_class=""), 1)

    assert Worker().run(TemplateFormatter(StackFrameResolver())) == "Worker.run"


def test_stack_shallower_than_depth_degrades_to_unknown(sample_event: LogEvent) -> None:
    rendered = TemplateFormatter(StackFrameResolver()).render("[%C - %S] %F:%N", sample_event, 100_000)

    assert rendered == f"[Foo - {UNKNOWN}] {UNKNOWN}:{UNKNOWN}"


def test_module_level_caller_reports_unknown_subroutine(sample_event: LogEvent) -> None:
    formatter = TemplateFormatter(StackFrameResolver())
    namespace = {"formatter": formatter, "event": sample_event}

    exec(compile("result = formatter.render('%S', event, 1)", "<script>", "exec"), namespace)

    assert namespace["result"] == UNKNOWN


def test_without_resolver_caller_fields_are_unknown(sample_event: LogEvent) -> None:
    assert TemplateFormatter().render("%S", sample_event, 4) == UNKNOWN


def test_level_timestamp_and_pid_tokens(sample_event: LogEvent) -> None:
    formatter = TemplateFormatter(pid_provider=lambda: 4242)

    assert formatter.render("%D %L %P", sample_event, 4) == "2025-09-30T12:00:00+00:00 INFO 4242"


def test_unknown_tokens_pass_through(sample_event: LogEvent) -> None:
    assert TemplateFormatter().render("%Y-%M-%q 50%", sample_event, 4) == "%Y-hi-%q 50%"


def test_negative_depth_is_rejected(sample_event: LogEvent) -> None:
    with pytest.raises(ConfigurationError, match="call_depth"):
        TemplateFormatter().render("%M", sample_event, -1)
