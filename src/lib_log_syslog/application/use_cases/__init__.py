"""Use cases composing the dispatch pipeline."""

from __future__ import annotations

from .dispatch import DEFAULT_CALL_DEPTH, DEFAULT_TEMPLATE, DispatcherState, SyslogDispatcher
from .fan_out import DispatchHub
from .format_message import TemplateFormatter

__all__ = [
    "DEFAULT_CALL_DEPTH",
    "DEFAULT_TEMPLATE",
    "DispatchHub",
    "DispatcherState",
    "SyslogDispatcher",
    "TemplateFormatter",
]
