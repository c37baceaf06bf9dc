"""Click command line interface for inspecting and exercising the dispatcher.

Purpose
-------
Give operators a quick way to check the level map and facility codes and to
send a test line through the same pipeline host code uses.

Contents
--------
* :func:`cli` - root group with ``--version`` and ``--use-dotenv``.
* ``info``, ``levels``, ``facilities``, ``send`` subcommands.
"""

from __future__ import annotations

import socket
from datetime import datetime, timezone

import click
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from . import config as log_config
from .adapters import RichConsoleBackend, SocketSyslogBackend
from .application.ports import SyslogBackendPort
from .domain import DEFAULT_LEVEL_MAP, Facility, LogEvent, LogLevel, LogSyslogError
from .lib_log_syslog import create_dispatcher, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_LEVEL_CHOICES = [level.name for level in LogLevel]
_FACILITY_CHOICES = [facility.name.lower() for facility in Facility]


def _parse_address(raw: str) -> str | tuple[str, int]:
    """Return a unix socket path or a ``(host, port)`` tuple parsed from ``raw``.

    Examples
    --------
    >>> _parse_address("/dev/log")
    '/dev/log'
    >>> _parse_address("loghost:1514")
    ('loghost', 1514)
    """
    if raw.startswith("/") or ":" not in raw:
        return raw
    host, _, port_text = raw.rpartition(":")
    try:
        port = int(port_text)
    except ValueError as exc:
        raise click.BadParameter(f"port must be an integer, got {port_text!r}", param_hint="--address") from exc
    if port <= 0:
        raise click.BadParameter("port must be positive", param_hint="--address")
    return host, port


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--version", "-V", is_flag=True, help="Print the installed version and exit.")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before running (default: ${log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, *, version: bool, use_dotenv: bool | None) -> None:
    """Syslog dispatcher utilities."""

    if use_dotenv is None:
        use_dotenv = log_config.env_bool(log_config.DOTENV_ENV_VAR, False)
    if use_dotenv:
        log_config.enable_dotenv()

    if version:
        click.echo(__init__conf__.version)
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info")
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("levels")
def cli_levels() -> None:
    """Show the default host level to syslog priority mapping."""

    table = Table(title="Default level map")
    table.add_column("host level")
    table.add_column("syslog priority")
    table.add_column("code", justify="right")
    for level, priority in DEFAULT_LEVEL_MAP.items():
        table.add_row(level.name, priority.syslog_name, str(int(priority)))
    Console().print(table)


@cli.command("facilities")
def cli_facilities() -> None:
    """Show the syslog facility names and codes."""

    table = Table(title="Syslog facilities")
    table.add_column("facility")
    table.add_column("code", justify="right")
    for facility in Facility:
        table.add_row(facility.name.lower(), str(int(facility)))
    Console().print(table)


@cli.command("send")
@click.argument("message")
@click.option("--level", type=click.Choice(_LEVEL_CHOICES, case_sensitive=False), default="INFO", show_default=True)
@click.option("--source-class", default="cli", show_default=True, help="Value rendered for %C.")
@click.option("--ident", default=None, help="Syslog ident (default: $LOG_SYSLOG_IDENT or program name).")
@click.option("--facility", type=click.Choice(_FACILITY_CHOICES, case_sensitive=False), default=None)
@click.option("--format", "template", default=None, help="Format template (default: '[%C - %S] : %M').")
@click.option("--call-depth", type=click.IntRange(min=0), default=None)
@click.option(
    "--backend",
    "backend_name",
    type=click.Choice(["syslog", "console"], case_sensitive=False),
    default="syslog",
    show_default=True,
)
@click.option("--address", default=None, help="Syslog socket path or HOST:PORT (syslog backend only).")
@click.option("--tcp", is_flag=True, help="Use TCP for HOST:PORT addresses.")
def cli_send(
    *,
    message: str,
    level: str,
    source_class: str,
    ident: str | None,
    facility: str | None,
    template: str | None,
    call_depth: int | None,
    backend_name: str,
    address: str | None,
    tcp: bool,
) -> None:
    """Send MESSAGE through a syslog dispatcher."""

    backend: SyslogBackendPort
    if backend_name.lower() == "console":
        backend = RichConsoleBackend()
    else:
        backend = SocketSyslogBackend(
            address=_parse_address(address) if address else None,
            socktype=socket.SOCK_STREAM if tcp else None,
        )
    try:
        dispatcher = create_dispatcher(
            ident=ident,
            facility=facility,
            template=template,
            call_depth=call_depth,
            backend=backend,
        )
        event = LogEvent(
            level=LogLevel.from_name(level),
            source_class=source_class,
            message=message,
            timestamp=datetime.now(timezone.utc),
        )
        dispatcher.log(event)
    except LogSyslogError as exc:
        raise click.ClickException(str(exc)) from exc


def main(argv: list[str] | None = None) -> int:
    """Run the Click group and return the exit code instead of exiting."""

    try:
        cli.main(args=argv, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return 0


__all__ = ["cli", "main"]
