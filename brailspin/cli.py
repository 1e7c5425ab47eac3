"""Entry point for the brailspin command."""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from prompt_toolkit.input import Input
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from .config import SpinnerSettings, load_config
from .terminal import open_input, raw_input, visible_cursor, wait_for_keypress
from .tui.animation import Sink, stderr_sink, spinner

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, rich_markup_mode="rich")


def _create_console(use_color: bool) -> Console:
    return Console(no_color=not use_color, highlight=use_color)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_settings(config_path: Optional[Path]) -> SpinnerSettings:
    try:
        return load_config(config_path).settings
    except ValidationError as exc:
        typer.echo(f"Invalid configuration:\n{exc}", err=True)
        raise typer.Exit(code=2) from exc


async def run_until_keypress(
    settings: SpinnerSettings,
    *,
    sink: Sink,
    input_: Input,
    console: Console,
) -> bool:
    """Spin after ``settings.message`` until a key is pressed.

    Returns False when the spinner or its output stream failed. The failure is
    logged and the done message is still printed.
    """
    succeeded = True
    try:
        sink.write(settings.message.encode("utf-8"))
        sink.flush()
        with visible_cursor(sink), raw_input(input_):
            async with spinner(settings.interval, frames=settings.frames(), sink=sink) as handle:
                keypress = asyncio.ensure_future(wait_for_keypress(input_))
                failure = asyncio.ensure_future(handle.done.outcome())
                try:
                    await asyncio.wait({keypress, failure}, return_when=asyncio.FIRST_COMPLETED)
                finally:
                    keypress.cancel()
                    failure.cancel()
                    await asyncio.gather(keypress, failure, return_exceptions=True)
    except Exception as exc:
        logger.warning("Spinner stopped with an error: %s", exc)
        succeeded = False

    console.print(settings.done_message)
    return succeeded


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a TOML configuration file.",
    ),
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        help="Seconds between frames.",
    ),
    color: Optional[bool] = typer.Option(
        None,
        "--color/--no-color",
        help="Force colored status output on or off.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log spinner lifecycle details.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the resolved configuration and exit.",
    ),
) -> None:
    """Spin until a key is pressed."""
    if ctx.invoked_subcommand is not None:
        return

    settings = _load_settings(config_path)
    updates: dict[str, object] = {}
    if interval is not None:
        updates["interval"] = interval
    if color is not None:
        updates["use_color"] = color
    if verbose:
        updates["log_level"] = "DEBUG"
    if updates:
        try:
            settings = SpinnerSettings(**{**settings.model_dump(), **updates})
        except ValidationError as exc:
            typer.echo(f"Invalid configuration:\n{exc}", err=True)
            raise typer.Exit(code=2) from exc

    console = _create_console(settings.use_color)

    if dry_run:
        payload = json.dumps(settings.model_dump(), indent=2, ensure_ascii=False)
        console.print(Panel(payload, title="configuration"))
        return

    _configure_logging(settings.log_level)
    logger.debug("Starting spinner with %d frames every %ss", settings.frame_count, settings.interval)
    asyncio.run(
        run_until_keypress(settings, sink=stderr_sink(), input_=open_input(), console=console)
    )


@app.command()
def glyphs(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a TOML configuration file.",
    ),
) -> None:
    """Print every glyph of the animation cycle in order."""
    settings = _load_settings(config_path)
    cycle = "".join(chr(settings.codepoint_start + offset) for offset in range(settings.frame_count))
    console = _create_console(settings.use_color)
    console.print(
        Panel(
            cycle,
            title="glyphs",
            subtitle=f"U+{settings.codepoint_start:04X} x {settings.frame_count}",
        )
    )


def entrypoint() -> None:
    """Typer entrypoint for `brailspin`."""
    app()


if __name__ == "__main__":  # pragma: no cover
    entrypoint()
