"""Configuration helpers: ``.env`` loading and environment-backed settings.

Purpose
-------
Resolve dispatcher options from explicit arguments, ``LOG_SYSLOG_*``
environment variables, and built-in defaults, in that order.

Contents
--------
* :func:`enable_dotenv` - load the nearest ``.env`` once per process.
* :func:`default_ident` - program name used when no ident is configured.
* :class:`DispatcherSettings` / :func:`resolve_settings`.

Environment
-----------
``LOG_SYSLOG_IDENT``, ``LOG_SYSLOG_FACILITY``, ``LOG_SYSLOG_FORMAT``,
``LOG_SYSLOG_CALL_DEPTH``, and ``LOG_SYSLOG_USE_DOTENV`` (CLI toggle).
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .application.use_cases.dispatch import DEFAULT_CALL_DEPTH, DEFAULT_TEMPLATE
from .domain.errors import ConfigurationError
from .domain.levels import Facility

DOTENV_ENV_VAR = "LOG_SYSLOG_USE_DOTENV"
IDENT_ENV_VAR = "LOG_SYSLOG_IDENT"
FACILITY_ENV_VAR = "LOG_SYSLOG_FACILITY"
FORMAT_ENV_VAR = "LOG_SYSLOG_FORMAT"
CALL_DEPTH_ENV_VAR = "LOG_SYSLOG_CALL_DEPTH"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_DOTENV_LOADED: Path | None = None


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file without overriding existing variables.

    The search walks upward from ``search_from`` (default: the working
    directory). Returns the resolved path of the loaded file, or ``None`` when
    no file was found. Repeated calls reuse the first result.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED

    if search_from is None:
        found = find_dotenv(usecwd=True)
        if not found:
            return None
        candidate = Path(found)
    else:
        start = search_from.resolve()
        candidate = next((d / ".env" for d in (start, *start.parents) if (d / ".env").is_file()), None)
        if candidate is None:
            return None

    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = candidate.resolve()
    return _DOTENV_LOADED


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


def env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of environment variable ``name`` with fallback.

    Examples
    --------
    >>> _ = os.environ.pop('LOG_SYSLOG_EXAMPLE_BOOL', None)
    >>> env_bool('LOG_SYSLOG_EXAMPLE_BOOL', True)
    True
    >>> os.environ['LOG_SYSLOG_EXAMPLE_BOOL'] = 'off'
    >>> env_bool('LOG_SYSLOG_EXAMPLE_BOOL', True)
    False
    >>> _ = os.environ.pop('LOG_SYSLOG_EXAMPLE_BOOL', None)
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {value!r}")


def default_ident() -> str:
    """Return the program name used as the default syslog ident."""

    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else ""
    name = Path(argv0).name
    if not name or name == "-c":
        return "python"
    return name


@dataclass(slots=True, frozen=True)
class DispatcherSettings:
    """Resolved dispatcher options."""

    ident: str
    facility: Facility
    template: str
    call_depth: int


def _coerce_call_depth(value: str | int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        depth = value
    else:
        try:
            depth = int(str(value).strip())
        except ValueError as exc:
            raise ConfigurationError(f"call depth must be an integer, got {value!r}") from exc
    if depth < 0:
        raise ConfigurationError(f"call depth must be non-negative, got {depth}")
    return depth


def resolve_settings(
    *,
    ident: str | None = None,
    facility: Facility | str | int | None = None,
    template: str | None = None,
    call_depth: int | None = None,
) -> DispatcherSettings:
    """Merge explicit options, ``LOG_SYSLOG_*`` variables, and defaults.

    Explicit (non-``None``) arguments win over the environment.

    Examples
    --------
    >>> for name in (IDENT_ENV_VAR, FACILITY_ENV_VAR, FORMAT_ENV_VAR, CALL_DEPTH_ENV_VAR):
    ...     _ = os.environ.pop(name, None)
    >>> settings = resolve_settings(ident="svc")
    >>> settings.facility, settings.template, settings.call_depth
    (<Facility.LOCAL0: 16>, '[%C - %S] : %M', 4)
    """
    resolved_ident = ident if ident is not None else os.getenv(IDENT_ENV_VAR) or default_ident()
    raw_facility = facility if facility is not None else os.getenv(FACILITY_ENV_VAR) or Facility.LOCAL0
    resolved_template = template if template is not None else os.getenv(FORMAT_ENV_VAR, DEFAULT_TEMPLATE)
    raw_depth = call_depth if call_depth is not None else os.getenv(CALL_DEPTH_ENV_VAR) or DEFAULT_CALL_DEPTH
    return DispatcherSettings(
        ident=resolved_ident,
        facility=Facility.coerce(raw_facility),
        template=resolved_template,
        call_depth=_coerce_call_depth(raw_depth),
    )


__all__ = [
    "CALL_DEPTH_ENV_VAR",
    "DOTENV_ENV_VAR",
    "DispatcherSettings",
    "FACILITY_ENV_VAR",
    "FORMAT_ENV_VAR",
    "IDENT_ENV_VAR",
    "default_ident",
    "enable_dotenv",
    "env_bool",
    "resolve_settings",
]
