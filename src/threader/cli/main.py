import json
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..chunking import calculate_statistics, format_statistics, get_chunks
from ..core import config as config_module
from ..core.config import PRESETS, Settings, resolve_preset
from ..core.logging import log, setup_logging

app = typer.Typer(add_completion=False, help="Threader CLI")


@app.callback()
def _init(
    config_file: str | None = typer.Option(
        None,
        "--config",
        help="Config file (.threader.yaml auto-discovered)",
    ),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log format: json|plain|auto"
    ),
) -> None:
    settings = Settings.load_config(config_file)
    config_module.SETTINGS = settings
    setup_logging(log_format or settings.LOG_FORMAT, settings.LOG_LEVEL)  # type: ignore[arg-type]


def _read_input(file: Path | None) -> str:
    """Read source text from a file, or stdin when no file is given."""
    if file is None:
        return sys.stdin.read()
    try:
        return file.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"❌ Could not read {file}: {e}", err=True)
        raise typer.Exit(1) from e


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def split(
    file: Path | None = typer.Argument(
        None, help="Text file to split (reads stdin when omitted)"
    ),
    length: int | None = typer.Option(
        None, "--length", "-l", help="Maximum characters per chunk"
    ),
    preset: str | None = typer.Option(
        None, "--preset", "-p", help="Platform preset: threads, bluesky, twitter"
    ),
    sentences: bool | None = typer.Option(
        None, "--sentences/--no-sentences", help="Keep sentences whole"
    ),
    paragraphs: bool | None = typer.Option(
        None, "--paragraphs/--no-paragraphs", help="Never join paragraphs"
    ),
    enumerate_chunks: bool | None = typer.Option(
        None, "--enumerate/--no-enumerate", help="Append (i/N) to each chunk"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print chunks as a JSON array"),
) -> None:
    """
    Split text into chunks that fit a platform's character limit.

    Example:
        threader split post.txt --preset bluesky --enumerate
        cat post.txt | threader split -l 140 --json
    """
    settings = config_module.SETTINGS
    text = _read_input(file)
    if not text.strip():
        typer.echo("❌ Please enter some text to split.", err=True)
        raise typer.Exit(1)

    if preset is not None:
        try:
            length = resolve_preset(preset).length
        except KeyError as e:
            typer.echo(f"❌ {e.args[0]}", err=True)
            raise typer.Exit(1) from e

    try:
        options = settings.threading_options(
            maximum_length=length,
            break_on_sentences=sentences,
            break_on_paragraphs=paragraphs,
            enumerate=enumerate_chunks,
        )
    except KeyError as e:
        # THREADER_PRESET set to an unknown name
        typer.echo(f"❌ {e.args[0]}", err=True)
        raise typer.Exit(1) from e

    chunks = get_chunks(text, options, template=settings.ENUMERATION_TEMPLATE)
    log.info(
        "cli.split.complete",
        chunks=len(chunks),
        maximum_length=options.available_length,
    )

    if as_json:
        typer.echo(json.dumps(chunks, ensure_ascii=False, indent=2))
        return

    typer.echo("\n\n".join(chunks))


@app.command()
def stats(
    file: Path | None = typer.Argument(
        None, help="Text file to analyze (reads stdin when omitted)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print statistics as JSON"),
) -> None:
    """Show character, word, sentence and paragraph counts."""
    settings = config_module.SETTINGS
    statistics = calculate_statistics(_read_input(file))

    if as_json:
        typer.echo(json.dumps(statistics.to_dict()))
        return

    typer.echo(format_statistics(statistics, settings.STATS_TEMPLATE))


@app.command()
def presets() -> None:
    """List the built-in platform presets."""
    table = Table(title="Platform presets")
    table.add_column("Name", style="cyan")
    table.add_column("Length", justify="right")
    table.add_column("Label")

    for preset in PRESETS.values():
        table.add_row(preset.name, str(preset.length), preset.label)

    Console().print(table)


if __name__ == "__main__":
    app()
