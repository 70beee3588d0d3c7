"""Pytest configuration and fixtures."""

import hashlib
import json
import os
import pathlib
import pytest
import vcr

from image_vocab.models import ImageInput

# Calculate hash of prompts.py for cassette invalidation
PROMPTS_HASH = hashlib.sha256(
    (pathlib.Path(__file__).parent.parent / "image_vocab" / "prompts.py").read_bytes()
).hexdigest()[:8]


def cassette(name: str) -> str:
    """Generate cassette filename with prompt hash."""
    return f"fixtures/{name}_{PROMPTS_HASH}.yaml"


@pytest.fixture
def my_vcr():
    """VCR fixture for recording/replaying HTTP interactions."""
    return vcr.VCR(
        cassette_library_dir="tests",
        filter_query_parameters=[("key", "DUMMY")],
        record_mode="once",
    )


def live_guard():
    """Check if live testing is enabled."""
    if not os.getenv("IMAGE_VOCAB_LIVE"):
        pytest.skip("Live LLM disabled (set IMAGE_VOCAB_LIVE=1)")


def gemini_response(words) -> dict:
    """Build a Gemini generateContent response whose text is ``words`` as JSON."""
    text = words if isinstance(words, str) else json.dumps(words, ensure_ascii=False)
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeClient:
    """Stands in for GeminiClient; replays one canned response per call."""

    model = "fake-model"

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def generate(self, image_b64, mime_type, instruction=None):
        self.calls.append({"data": image_b64, "mime_type": mime_type, "instruction": instruction})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def make_images():
    """Build in-memory images named img0.png, img1.png, ..."""
    def _make(count: int):
        return [
            ImageInput(name=f"img{i}.png", mime_type="image/png", content=f"image-{i}".encode())
            for i in range(count)
        ]
    return _make


@pytest.fixture
def image_files(tmp_path):
    """Write two small image files to disk."""
    paths = []
    for name in ("menu.png", "sign.jpg"):
        path = tmp_path / name
        path.write_bytes(b"\x89PNG fake " + name.encode())
        paths.append(path)
    return paths
