"""Command-line interface for the image vocabulary extractor."""

import asyncio
import logging
import unicodedata
from pathlib import Path
from typing import Tuple

import click
import structlog

from .config import CSV_HEADER, LOCALIZED_CSV_HEADER, MODEL_NAME, OUTPUT_CSV
from .errors import LANGUAGES, ValidationError, localize
from .gemini_client import GeminiClient
from .models import AnalysisResult, RunPhase
from .pipeline import Pipeline
from .utils import load_images


def configure_logging(verbose: bool = False):
    """Configure structlog: JSON lines by default, console output when verbose."""
    if verbose:
        logging.basicConfig(level=logging.INFO)
    renderer = structlog.dev.ConsoleRenderer() if verbose else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


log = structlog.get_logger()


def display_width(text: str) -> int:
    """Terminal column width of text; wide and fullwidth characters take two."""
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def _pad(text: str, width: int) -> str:
    return text + " " * (width - display_width(text))


def format_table(result: AnalysisResult, header: Tuple[str, str]) -> str:
    """Render the words as a plain two-column text table."""
    width = max([display_width(header[0])] + [display_width(w.english_word) for w in result.words])
    lines = [f"{_pad(header[0], width)}  {header[1]}", f"{'-' * width}  {'-' * display_width(header[1])}"]
    for word in result.words:
        lines.append(f"{_pad(word.english_word, width)}  {word.chinese_translation}")
    return "\n".join(lines)


@click.command()
@click.argument(
    "images",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=OUTPUT_CSV,
    help="Where to write the exported CSV"
)
@click.option(
    "--model",
    default=MODEL_NAME,
    help="Gemini model to use"
)
@click.option(
    "--localized-header",
    is_flag=True,
    help="Use the Chinese column labels in the table and CSV"
)
@click.option(
    "--lang",
    type=click.Choice(LANGUAGES),
    default="en",
    help="Language of user-facing messages (zh-TW also selects the Chinese column labels)"
)
@click.option(
    "--no-export",
    is_flag=True,
    help="Show the word table without writing a CSV file"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging"
)
def main(images: Tuple[Path, ...], output: Path, model: str, localized_header: bool,
         lang: str, no_export: bool, verbose: bool):
    """Extract English words and Chinese translations from IMAGES."""
    configure_logging(verbose)
    header = LOCALIZED_CSV_HEADER if localized_header or lang == "zh-TW" else CSV_HEADER

    log.info("Starting image vocabulary extractor",
             image_count=len(images),
             model=model,
             output=str(output),
             lang=lang,
             no_export=no_export)

    pipeline = Pipeline(client=GeminiClient(model=model))
    try:
        pipeline.select_images(load_images(images))
        state = asyncio.run(pipeline.start_analysis())
    except ValidationError as e:
        raise click.ClickException(localize(e.user_message, lang))

    if state.phase != RunPhase.SUCCESS:
        raise click.ClickException(localize(state.message, lang))

    click.echo(format_table(state.result, header))

    if not no_export:
        try:
            path = pipeline.export_csv(output, header)
        except (ValidationError, OSError) as e:
            log.error("Export failed", error=str(e))
            raise click.ClickException(localize(getattr(e, "user_message", str(e)), lang))
        click.echo(f"Exported {len(state.result.words)} words to {path}")


if __name__ == "__main__":
    main()
