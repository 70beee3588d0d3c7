"""Gemini ``generateContent`` client for word extraction.

One call per image, no retry: a failed request is reported to the caller
as ``NetworkError`` (transport) or ``ServiceError`` (HTTP status or body).
"""

import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp
import structlog

from .config import GEMINI_API_BASE, GEMINI_API_KEY, MODEL_NAME
from .errors import NetworkError, ServiceError
from .prompts import PROMPT_EXTRACT_WORDS, RESPONSE_SCHEMA

log = structlog.get_logger()

BODY_EXCERPT_CHARS = 300


def build_payload(image_b64: str, mime_type: str, instruction: str = PROMPT_EXTRACT_WORDS) -> Dict[str, Any]:
    """Build the request body: instruction plus inline image, JSON-constrained output."""
    return {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": instruction},
                    {"inlineData": {"mimeType": mime_type, "data": image_b64}},
                ],
            }
        ],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


class GeminiClient:
    """Performs single request/response exchanges with the Gemini API."""

    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        model: str = MODEL_NAME,
        base_url: str = GEMINI_API_BASE,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._session = session

    def endpoint_url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent?key={self.api_key}"

    def _redact(self, text: str) -> str:
        if self.api_key:
            return text.replace(self.api_key, "***")
        return text

    async def generate(
        self, image_b64: str, mime_type: str, instruction: str = PROMPT_EXTRACT_WORDS
    ) -> Dict[str, Any]:
        """POST one image and return the decoded JSON response body."""
        payload = build_payload(image_b64, mime_type, instruction)

        if self._session is not None:
            return await self._post(self._session, payload)
        async with aiohttp.ClientSession() as session:
            return await self._post(session, payload)

    async def _post(self, session, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            async with session.post(
                self.endpoint_url(),
                headers={"Content-Type": "application/json"},
                json=payload,
            ) as response:
                status = response.status
                body = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            # aiohttp messages may embed the request URL, which carries the key
            reason = self._redact(str(e)) or type(e).__name__
            log.error("Gemini request failed", model=self.model, error=reason, error_type=type(e).__name__)
            raise NetworkError(f"Request to {self.model} failed: {reason}") from None

        if not 200 <= status < 300:
            excerpt = self._redact(body[:BODY_EXCERPT_CHARS])
            log.error("Gemini API returned an error", model=self.model, status=status, body=excerpt)
            raise ServiceError(
                f"Gemini API returned HTTP {status}: {excerpt}", status=status
            )

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            log.error("Gemini response body is not JSON", model=self.model, body=self._redact(body[:BODY_EXCERPT_CHARS]))
            raise ServiceError(f"Unreadable response body from {self.model}", status=status) from e
