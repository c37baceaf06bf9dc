"""Level and class matchers evaluated by the host before delivery.

A matcher is deliberately loose: ``None``, a predicate, a regular expression,
a level, a name, or a collection of any of those. :func:`matches` is the single
interpretation of that vocabulary.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Union

from .levels import LogLevel

Matcher = Union[None, LogLevel, str, "re.Pattern[str]", Callable[[Any], bool], set, frozenset, list, tuple]


def matches(matcher: Matcher, value: LogLevel | str) -> bool:
    """Return ``True`` when ``value`` is accepted by ``matcher``.

    Examples
    --------
    >>> matches(None, LogLevel.INFO)
    True
    >>> matches({LogLevel.ERROR, LogLevel.FATAL}, LogLevel.INFO)
    False
    >>> matches(re.compile(r"^Http"), "HttpClient")
    True
    >>> matches(at_least(LogLevel.WARN), LogLevel.ERROR)
    True
    """
    if matcher is None:
        return True
    if isinstance(matcher, LogLevel):
        return isinstance(value, LogLevel) and value is matcher
    if isinstance(matcher, str):
        if isinstance(value, LogLevel):
            return value.name == matcher.strip().upper()
        return value == matcher
    if isinstance(matcher, re.Pattern):
        subject = value.name if isinstance(value, LogLevel) else value
        return matcher.search(subject) is not None
    if isinstance(matcher, (set, frozenset, list, tuple)):
        return any(matches(member, value) for member in matcher)
    if callable(matcher):
        return bool(matcher(value))
    raise TypeError(f"Unsupported matcher: {matcher!r}")


def at_least(level: LogLevel) -> Callable[[LogLevel], bool]:
    """Return a level predicate accepting ``level`` and everything above it."""

    return lambda value: value >= level


def at_most(level: LogLevel) -> Callable[[LogLevel], bool]:
    """Return a level predicate accepting ``level`` and everything below it."""

    return lambda value: value <= level


__all__ = ["Matcher", "at_least", "at_most", "matches"]
