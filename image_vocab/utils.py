"""Utility functions for image loading, preview handles and CSV export."""

import csv
import io
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import structlog

from .config import CSV_HEADER, OUTPUT_CSV
from .errors import MSG_NOTHING_TO_EXPORT, ValidationError
from .models import AnalysisResult, ImageInput

log = structlog.get_logger()


def load_images(paths: Iterable[Path]) -> List[ImageInput]:
    """Wrap image files as ImageInput, keeping the given order."""
    images = [ImageInput.from_path(Path(p)) for p in paths]
    log.info("Loaded images", count=len(images))
    return images


def generate_preview_handle(image: ImageInput) -> str:
    """Generate a unique, revocable preview handle for a selected image."""
    unique_id = str(uuid.uuid4())[:8]
    return f"preview:{unique_id}:{image.name}"


def render_csv(result: AnalysisResult, header: Sequence[str] = CSV_HEADER) -> str:
    """Render words as CSV text: header row, then one row per word.

    Fields containing a comma, a double quote or a line break are quoted,
    with inner double quotes doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(header)
    for word in result.words:
        writer.writerow([word.english_word, word.chinese_translation])
    return buffer.getvalue()


def write_vocab_csv(
    result: Optional[AnalysisResult], path: Path = OUTPUT_CSV, header: Sequence[str] = CSV_HEADER
) -> Path:
    """Write the word table to a CSV file."""
    if result is None or result.is_empty:
        raise ValidationError("nothing to export", MSG_NOTHING_TO_EXPORT)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        f.write(render_csv(result, header))

    log.info("Vocabulary CSV written", file=str(path), word_count=len(result.words))
    return path
