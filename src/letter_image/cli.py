from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from textual.logging import TextualHandler

from .app import LetterImageApp
from .config import ERROR_MESSAGE, Settings, load_settings
from .errors import PipelineFailed
from .logs import setup_logger
from .models.grid import Grid
from .services.pipeline import PipelineOrchestrator, RunOutcome
from .services.sink import MemorySink
from .ui.render import grid_to_plain, grid_to_text

app = typer.Typer(help="Turn images into grids of coloured letters.")


def _settings(config: Optional[Path], **overrides) -> Settings:
    try:
        return load_settings(config, **overrides)
    except (OSError, ValueError, ValidationError) as e:
        raise SystemExit(f"Invalid settings: {e}")


def run_headless(settings: Settings, file: Optional[Path] = None, selector: Optional[str] = None) -> Grid:
    """Run one pipeline pass against an in-memory sink and return what ended up on it."""
    sink = MemorySink()
    pipeline = PipelineOrchestrator(sink, settings)
    if file is not None:
        outcome = asyncio.run(pipeline.input_change(file))
    else:
        outcome = asyncio.run(pipeline.kick_off(selector=selector))
    if outcome is not RunOutcome.PRESENTED or sink.grid is None:
        raise PipelineFailed(ERROR_MESSAGE)
    return sink.grid


@app.command(help="Open the letter viewer in the terminal.")
def show(
    selector: Optional[str] = typer.Option(None, help="Image number, e.g. 3 or #3."),
    base: Optional[str] = typer.Option(None, envvar="LETTER_IMAGE_BASE", help="Directory or http(s) URL holding images/."),
    config: Optional[Path] = typer.Option(None, envvar="LETTER_IMAGE_CONFIG", help="YAML settings file."),
    log: str = typer.Option("", help="Path to log file (optional)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    settings = _settings(config, base=base)
    setup_logger(log, verbose, stream=TextualHandler())
    ui = LetterImageApp(settings)
    ui.call_after_refresh(lambda: ui.open_glyphs(selector))
    ui.run()


@app.command(help="Convert one image without the UI and print the letters.")
def render(
    file: Optional[Path] = typer.Argument(None, help="Image file. Omit to use --selector."),
    selector: Optional[str] = typer.Option(None, help="Image number, e.g. 3 or #3."),
    base: Optional[str] = typer.Option(None, envvar="LETTER_IMAGE_BASE"),
    config: Optional[Path] = typer.Option(None, envvar="LETTER_IMAGE_CONFIG"),
    colour: bool = typer.Option(True, "--colour/--no-colour", help="Print with or without colour."),
    monochrome: bool = typer.Option(False, "--monochrome", help="Sample in white."),
    alpha_source: Optional[str] = typer.Option(None, help="alpha or darkness."),
    alpha_mode: Optional[str] = typer.Option(None, help="raw, normalized or inverted."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    settings = _settings(
        config,
        base=base,
        monochrome=monochrome or None,
        alpha_source=alpha_source,
        alpha_mode=alpha_mode,
        fade_time=0.0,
    )
    setup_logger("", verbose)
    try:
        grid = run_headless(settings, file=file, selector=selector)
    except PipelineFailed as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    if colour:
        Console().print(grid_to_text(grid))
    else:
        typer.echo(grid_to_plain(grid))


def main():
    app()


if __name__ == "__main__":
    main()
