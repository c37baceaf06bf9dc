"""Stack-frame caller resolution for the ``%C``/``%S``/``%F``/``%N`` placeholders.

The resolver walks ``f_back`` links from the frame that called
:meth:`StackFrameResolver.resolve`. It depends on the exact shape of the call
chain: inserting a wrapper between the user's code and the formatter moves the
target frame and the configured depth has to follow.
"""

from __future__ import annotations

import inspect
from types import FrameType

from lib_log_syslog.application.ports.caller import CallerContextResolverPort
from lib_log_syslog.domain.caller import UNKNOWN, CallerContext

_MODULE_CODE = "<module>"


def _owner_name(frame: FrameType) -> str:
    """Return the class bound to ``self``/``cls`` in ``frame``, or :data:`UNKNOWN`."""

    code = frame.f_code
    if code.co_argcount == 0 or code.co_varnames[0] not in ("self", "cls"):
        return UNKNOWN
    owner = frame.f_locals.get(code.co_varnames[0])
    if owner is None:
        return UNKNOWN
    if isinstance(owner, type):
        return owner.__name__
    return type(owner).__name__


def context_from_frame(frame: FrameType) -> CallerContext:
    """Build a :class:`CallerContext` describing ``frame``.

    Module-level code has no subroutine, so it reports :data:`UNKNOWN`.
    """
    code = frame.f_code
    subroutine = UNKNOWN if code.co_name == _MODULE_CODE else code.co_name
    return CallerContext(
        class_name=_owner_name(frame),
        subroutine=subroutine,
        filename=code.co_filename,
        lineno=frame.f_lineno,
    )


class StackFrameResolver(CallerContextResolverPort):
    """Resolve caller context by unwinding the interpreter call stack."""

    def resolve(self, depth: int) -> CallerContext:
        """Return the context ``depth`` frames outward from the caller of this method.

        Examples
        --------
        >>> def outer():
        ...     return StackFrameResolver().resolve(0)
        >>> outer().subroutine
        'outer'
        >>> StackFrameResolver().resolve(10_000) == CallerContext.unknown()
        True
        """
        current = inspect.currentframe()
        target = current.f_back if current is not None else None
        try:
            for _ in range(depth):
                if target is None:
                    break
                target = target.f_back
            if target is None:
                return CallerContext.unknown()
            return context_from_frame(target)
        finally:
            del current, target


__all__ = ["StackFrameResolver", "context_from_frame"]
