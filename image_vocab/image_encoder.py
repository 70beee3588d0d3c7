"""Image encoding for transport to the inference service."""

import asyncio
import base64

import structlog

from .config import ACCEPTED_MIME_PREFIX
from .errors import ReadError
from .models import ImageInput

log = structlog.get_logger()


async def encode_image(image: ImageInput) -> str:
    """Return the image content as bare base64 text (no ``data:`` prefix)."""
    if not image.mime_type.startswith(ACCEPTED_MIME_PREFIX):
        log.warning("Selected file may not be an image", image=image.name, mime_type=image.mime_type)

    if image.content is not None:
        raw = image.content
    elif image.path is not None:
        # Read off the event loop
        loop = asyncio.get_running_loop()
        try:
            raw = await loop.run_in_executor(None, image.path.read_bytes)
        except OSError as e:
            log.error("Failed to read image", image=image.name, error=str(e))
            raise ReadError(f"Could not read image '{image.name}': {e}") from e
    else:
        raise ReadError(f"Image '{image.name}' has neither content nor a path")

    return base64.b64encode(raw).decode("ascii")
