"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

name = "lib_log_syslog"
title = "Syslog dispatcher for structured host logging frameworks"
version = "0.1.0"
homepage = "https://github.com/bitranox/lib_log_syslog"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_syslog"


def info_lines() -> list[str]:
    """Return the ``key: value`` lines of the metadata banner."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    return [f"    {label.ljust(pad)} = {value}" for label, value in fields]
