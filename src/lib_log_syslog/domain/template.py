"""Placeholder grammar for dispatcher format templates.

Purpose
-------
Own the token table and the single-pass substitution so the formatter only
has to gather field values.

Contents
--------
* :data:`PLACEHOLDERS` - token letter to field name.
* :data:`CALLER_TOKENS` - tokens whose values come from the call stack.
* :func:`placeholders_in` and :func:`substitute`.

Token table
-----------
=====  ===========================================================
token  value
=====  ===========================================================
``%C`` originating class name
``%S`` calling subroutine/method name
``%M`` message text
``%F`` file name of the calling frame
``%N`` line number of the calling frame
``%L`` host level name
``%D`` event timestamp (ISO 8601)
``%P`` process id
``%%`` a literal ``%``
=====  ===========================================================

Any other ``%X`` pair, and a trailing lone ``%``, is copied unchanged.
"""

from __future__ import annotations

import re
from typing import Mapping

PLACEHOLDERS: Mapping[str, str] = {
    "C": "class_name",
    "S": "subroutine",
    "M": "message",
    "F": "filename",
    "N": "lineno",
    "L": "level",
    "D": "timestamp",
    "P": "pid",
}

CALLER_TOKENS = frozenset({"S", "F", "N"})

_TOKEN_RE = re.compile(r"%(.)", re.DOTALL)


def placeholders_in(template: str) -> frozenset[str]:
    """Return the recognised token letters used by ``template``.

    ``%%`` escapes are consumed by the scan, so ``"%%S"`` uses no placeholders.

    Examples
    --------
    >>> sorted(placeholders_in("[%C - %S] : %M"))
    ['C', 'M', 'S']
    >>> placeholders_in("100%% %S")
    frozenset({'S'})
    >>> placeholders_in("%%S")
    frozenset()
    """
    return frozenset(match.group(1) for match in _TOKEN_RE.finditer(template) if match.group(1) in PLACEHOLDERS)


def substitute(template: str, fields: Mapping[str, str]) -> str:
    """Replace every recognised token of ``template`` in one left-to-right scan.

    Examples
    --------
    >>> substitute("[%C - %S] : %M", {"class_name": "Foo", "subroutine": "bar", "message": "hi"})
    '[Foo - bar] : hi'
    >>> substitute("50%% done %Q", {})
    '50% done %Q'
    """

    def _replace(match: re.Match[str]) -> str:
        letter = match.group(1)
        if letter == "%":
            return "%"
        name = PLACEHOLDERS.get(letter)
        if name is None or name not in fields:
            return match.group(0)
        return fields[name]

    return _TOKEN_RE.sub(_replace, template)


__all__ = ["CALLER_TOKENS", "PLACEHOLDERS", "placeholders_in", "substitute"]
