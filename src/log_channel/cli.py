"""Click command group exposing metadata and a dispatch demo.

Purpose
-------
Give operators a quick way to inspect the installed package and watch the
first-eligible-wins dispatch at work from a shell.

Contents
--------
* :func:`cli` – root group with ``--traceback`` and ``--use-dotenv`` toggles.
* ``info`` / ``levels`` / ``demo`` subcommands.
* :func:`main` – runs the group through :mod:`lib_cli_exit_tools`.

System Role
-----------
Presentation layer only; every command builds on the public
:class:`log_channel.channel.Channel` API.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from . import config as channel_config
from .adapters import ContextScrubber, TestHandler
from .channel import Channel
from .domain import LogLevel

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_DEMO_MESSAGES: tuple[tuple[LogLevel, str], ...] = (
    (LogLevel.DEBUG, "cache warmed"),
    (LogLevel.INFO, "user signed in"),
    (LogLevel.WARNING, "quota at 90%"),
    (LogLevel.ERROR, "charge declined"),
    (LogLevel.CRITICAL, "ledger unavailable"),
    (LogLevel.ALERT, "payments offline"),
)


def summary_info() -> str:
    """Return the metadata banner as one string ending with a newline."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def _apply_traceback(_ctx: click.Context, _param: click.Parameter, value: bool | None) -> bool | None:
    if value is not None:
        lib_cli_exit_tools.config.traceback = value
        lib_cli_exit_tools.config.traceback_force_color = value
    return value


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(__init__conf__.version, "--version", "-V", prog_name=__init__conf__.shell_command)
@click.option(
    "--traceback/--no-traceback",
    default=None,
    expose_value=False,
    callback=_apply_traceback,
    help="Show full Python tracebacks when a command fails.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load a nearby .env before running (defaults to ${channel_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None) -> None:
    """Inspect log_channel and exercise a demo channel."""

    env_toggle = os.getenv(channel_config.DOTENV_ENV_VAR)
    if channel_config.should_use_dotenv(explicit=use_dotenv, env_value=env_toggle):
        channel_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print the package metadata banner."""

    click.echo(summary_info(), nl=False)


@cli.command("levels", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_levels() -> None:
    """List the severity levels in dispatch order."""

    table = Table(title="Severity levels")
    table.add_column("Level")
    table.add_column("Value", justify="right")
    table.add_column("Severity")
    table.add_column("stdlib")
    table.add_column("Icon")
    for level in LogLevel:
        table.add_row(
            level.name,
            str(level.value),
            level.severity,
            logging.getLevelName(level.to_python_level()),
            level.icon,
        )
    _console().print(table)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--name", default=None, help="Channel name (defaults to $LOG_CHANNEL_NAME or 'app').")
@click.option(
    "--level",
    type=click.Choice([level.name for level in LogLevel], case_sensitive=False),
    default=None,
    help="Handler threshold (defaults to $LOG_CHANNEL_LEVEL or DEBUG).",
)
@click.option("--scrub/--no-scrub", default=True, show_default=True, help="Mask the 'card' context field.")
def cli_demo(name: str | None, level: str | None, scrub: bool) -> None:
    """Log one message per level and show which ones the handler accepted."""

    outcome = _run_demo(name=name, level=level, scrub=scrub)
    table = Table(title=f"Channel {outcome['channel']!r} (threshold {outcome['threshold']})")
    table.add_column("Level")
    table.add_column("Message")
    table.add_column("Accepted")
    table.add_column("Context")
    for row in outcome["rows"]:
        table.add_row(row["level"], row["message"], "yes" if row["accepted"] else "no", row["context"])
    console = _console()
    console.print(table)
    console.print(f"{outcome['handled']} of {len(outcome['rows'])} records handled")


def _run_demo(*, name: str | None, level: str | None, scrub: bool) -> dict[str, Any]:
    defaults = channel_config.ChannelDefaults.from_env()
    threshold = LogLevel.from_name(level) if level else defaults.level
    channel = Channel(name or defaults.name)
    handler = TestHandler(level=threshold)
    channel.push_handler(handler)
    if scrub:
        channel.push_processor(ContextScrubber(patterns={"card": r"\d"}))

    rows: list[dict[str, Any]] = []
    for demo_level, message in _DEMO_MESSAGES:
        accepted = channel.add_record(demo_level, message, {"card": "4111 1111 1111 1111"})
        delivered = handler.records[-1] if accepted else None
        context = "" if delivered is None else " ".join(f"{k}={v}" for k, v in delivered.context.items())
        rows.append({"level": demo_level.name, "message": message, "accepted": accepted, "context": context})
    return {
        "channel": channel.name,
        "threshold": threshold.name,
        "rows": rows,
        "handled": len(handler.records),
    }


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def main(argv: Sequence[str] | None = None) -> int:
    """Run :func:`cli` through :mod:`lib_cli_exit_tools`, restoring its traceback settings.

    Parameters
    ----------
    argv:
        Optional argument list (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Exit code reported by the command.
    """

    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
