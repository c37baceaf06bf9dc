"""Caller context value resolved from the call stack."""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN = "<unknown>"
#: Marker rendered for any caller field that could not be resolved.


@dataclass(slots=True, frozen=True)
class CallerContext:
    """Class, subroutine, file and line of the code that emitted an event."""

    class_name: str = UNKNOWN
    subroutine: str = UNKNOWN
    filename: str = UNKNOWN
    lineno: int | None = None

    @classmethod
    def unknown(cls) -> "CallerContext":
        """Return the context used when no frame exists at the requested depth."""

        return cls()

    @property
    def line(self) -> str:
        """Return the line number as text, or :data:`UNKNOWN`."""

        return UNKNOWN if self.lineno is None else str(self.lineno)


__all__ = ["CallerContext", "UNKNOWN"]
