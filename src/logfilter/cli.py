"""CLI entry point for logfilter."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path  # noqa: TC003 - typer needs this at runtime for argument parsing
from typing import Annotated

import typer

from logfilter.config import get_config_path, load_config, save_config
from logfilter.models import AppConfig
from logfilter.reader import is_pipe

app = typer.Typer(add_completion=False)

HeadOption = Annotated[
    bool | None, typer.Option("--head/--tail", "-H", help="Start at the oldest line instead of following the tail")
]
HardWrapOption = Annotated[
    bool | None, typer.Option("--hard-wrap/--soft-wrap", "-w", help="Truncate long lines instead of wrapping them")
]
StatusOption = Annotated[bool | None, typer.Option("--status/--no-status", help="Show the status line")]
IgnoreCaseOption = Annotated[
    bool | None, typer.Option("--ignore-case/--case-sensitive", "-i", help="Match search patterns case-insensitively")
]
IntervalOption = Annotated[
    float | None, typer.Option("--interval", min=0.001, help="Seconds between polls of a followed file")
]


def _apply_overrides(
    config: AppConfig,
    *,
    head: bool | None,
    hard_wrap: bool | None,
    status: bool | None,
    ignore_case: bool | None,
    interval: float | None,
) -> AppConfig:
    """Return a copy of config with every option that was given on the command line applied."""
    viewer_updates: dict[str, bool] = {}
    if head is not None:
        viewer_updates["start_at_head"] = head
    if hard_wrap is not None:
        viewer_updates["hard_wrap"] = hard_wrap
    if status is not None:
        viewer_updates["show_status_bar"] = status
    if ignore_case is not None:
        viewer_updates["case_sensitive"] = not ignore_case

    updates: dict[str, object] = {"viewer": config.viewer.model_copy(update=viewer_updates)}
    if interval is not None:
        updates["poll_interval"] = interval
    return config.model_copy(update=updates)


def _setup_pipe_input() -> int:
    """Save stdin pipe fd, then redirect fd 0 to /dev/tty for Textual keyboard.

    Returns the saved pipe fd for reading data.
    """
    pipe_fd = os.dup(sys.stdin.fileno())
    tty_fd = os.open("/dev/tty", os.O_RDONLY)
    os.dup2(tty_fd, sys.stdin.fileno())
    os.close(tty_fd)
    sys.stdin = os.fdopen(0)
    return pipe_fd


def _setup_logging(*, debug: bool) -> None:
    """Send log records to the Textual devtools console."""
    from textual.logging import TextualHandler  # noqa: PLC0415

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[TextualHandler()],
    )


@app.command()
def view(  # noqa: PLR0913
    file: Annotated[Path | None, typer.Argument(help="Log file to follow, or '-' for stdin")] = None,
    head: HeadOption = None,
    hard_wrap: HardWrapOption = None,
    status: StatusOption = None,
    ignore_case: IgnoreCaseOption = None,
    interval: IntervalOption = None,
    debug: Annotated[bool, typer.Option("--debug", help="Log to the Textual devtools console")] = False,  # noqa: FBT002
) -> None:
    """Follow a log file or piped input in a filterable terminal view."""
    use_stdin = file is None or str(file) == "-"
    if not use_stdin and file is not None and not file.is_file():
        typer.echo(f"Error: {file} is not a file")
        raise typer.Exit(1)
    if use_stdin and not is_pipe():
        typer.echo("Error: provide a file or pipe input")
        raise typer.Exit(1)

    config = _apply_overrides(
        load_config(), head=head, hard_wrap=hard_wrap, status=status, ignore_case=ignore_case, interval=interval
    )
    _setup_logging(debug=debug)

    from logfilter.app import LogFilterApp  # noqa: PLC0415

    if use_stdin:
        log_app = LogFilterApp(config, source="stdin", pipe_fd=_setup_pipe_input())
    else:
        log_app = LogFilterApp(config, source=str(file), file_path=file)
    log_app.run()
    if log_app.return_code:
        raise typer.Exit(log_app.return_code)


@app.command("config")
def show_config(
    head: HeadOption = None,
    hard_wrap: HardWrapOption = None,
    status: StatusOption = None,
    ignore_case: IgnoreCaseOption = None,
    interval: IntervalOption = None,
    save: Annotated[bool, typer.Option("--save", help="Store the given options as defaults")] = False,  # noqa: FBT002
) -> None:
    """Print the effective configuration, optionally saving it as the new defaults."""
    config = _apply_overrides(
        load_config(), head=head, hard_wrap=hard_wrap, status=status, ignore_case=ignore_case, interval=interval
    )
    if save:
        path = save_config(config)
        typer.echo(f"Saved defaults to {path}")
    else:
        typer.echo(f"# {get_config_path()}")
    for key, value in config.viewer.model_dump().items():
        typer.echo(f"viewer.{key} = {value}")
    typer.echo(f"poll_interval = {config.poll_interval}")
    typer.echo(f"theme = {config.theme}")


def main() -> None:
    """Entry point for the CLI."""
    app()
