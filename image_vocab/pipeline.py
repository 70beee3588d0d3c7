"""Batch pipeline: selection, sequential per-image analysis and export."""

import time
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import structlog

from .aggregator import WordAggregator
from .config import CSV_HEADER, OUTPUT_CSV
from .errors import (
    MSG_FAILED,
    MSG_NO_IMAGES,
    MSG_NO_WORDS,
    MSG_RUN_ACTIVE,
    BatchError,
    ValidationError,
)
from .gemini_client import GeminiClient
from .image_encoder import encode_image
from .models import AnalysisResult, ImageInput, RunPhase, RunState
from .parser import parse_response
from .prompts import PROMPT_EXTRACT_WORDS
from .utils import generate_preview_handle, load_images, write_vocab_csv

log = structlog.get_logger()


class Pipeline:
    """Owns the image selection and the state of the analysis run.

    State only changes through ``select_images``, ``start_analysis`` and
    their transitions; callers get read-only views.
    """

    def __init__(self, client: Optional[GeminiClient] = None, instruction: str = PROMPT_EXTRACT_WORDS):
        self.client = client or GeminiClient()
        self.instruction = instruction
        self._images: Tuple[ImageInput, ...] = ()
        self._preview_handles: Tuple[str, ...] = ()
        self._state = RunState.idle()
        self._running = False

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def images(self) -> Tuple[ImageInput, ...]:
        return self._images

    @property
    def preview_handles(self) -> Tuple[str, ...]:
        return self._preview_handles

    @property
    def is_running(self) -> bool:
        return self._running

    def select_images(self, images: Sequence[ImageInput]) -> List[str]:
        """Replace the selection and clear any previous result or error."""
        if self._running:
            raise ValidationError("cannot change selection during a run", MSG_RUN_ACTIVE)

        self._revoke_previews()
        self._images = tuple(images)
        self._preview_handles = tuple(generate_preview_handle(image) for image in self._images)
        self._state = RunState.idle()
        log.info("Images selected", count=len(self._images))
        return list(self._preview_handles)

    def _revoke_previews(self):
        if self._preview_handles:
            log.debug("Revoking preview handles", count=len(self._preview_handles))
        self._preview_handles = ()

    async def start_analysis(self) -> RunState:
        """Analyze every selected image in order and return the final state."""
        if not self._images:
            raise ValidationError("no images selected", MSG_NO_IMAGES)
        if self._running:
            raise ValidationError("analysis already running", MSG_RUN_ACTIVE)

        self._running = True
        self._state = RunState.loading()
        log.info("Starting analysis", image_count=len(self._images), model=getattr(self.client, "model", None))

        final_state = RunState.idle()
        try:
            result = await self._run_batch()
            if result.is_empty:
                final_state = RunState.empty(MSG_NO_WORDS)
            else:
                final_state = RunState.success(result)
        except BatchError as e:
            log.error("Analysis failed", error=str(e), error_type=type(e).__name__)
            final_state = RunState.error(e.user_message)
        except Exception as e:
            log.exception("Analysis failed unexpectedly", error=str(e))
            final_state = RunState.error(MSG_FAILED)
        finally:
            self._running = False
            self._state = final_state

        log.info("Analysis finished", phase=final_state.phase.value,
                 word_count=len(final_state.result.words) if final_state.result else 0)
        return final_state

    async def _run_batch(self) -> AnalysisResult:
        aggregator = WordAggregator()

        for image in self._images:
            t0 = time.perf_counter()
            image_b64 = await encode_image(image)
            response = await self.client.generate(image_b64, image.mime_type, self.instruction)
            words = parse_response(response)
            elapsed = 1000 * (time.perf_counter() - t0)

            if words is None:
                log.warning("No prominent English words recognized", image=image.name, elapsed_ms=elapsed)
                continue

            added = aggregator.extend(words)
            log.info("Image analyzed", image=image.name, elapsed_ms=elapsed,
                     found=len(words), added=added)

        return aggregator.result()

    def export_csv(self, path: Optional[Path] = None, header: Sequence[str] = CSV_HEADER) -> Path:
        """Export the current result; fails if there is nothing to export."""
        result = self._state.result if self._state.phase == RunPhase.SUCCESS else None
        return write_vocab_csv(result, path or OUTPUT_CSV, header)


async def analyze_images(paths: Iterable[Path], client: Optional[GeminiClient] = None) -> RunState:
    """Convenience function to analyze a set of image files."""
    pipeline = Pipeline(client=client)
    pipeline.select_images(load_images(paths))
    return await pipeline.start_analysis()
