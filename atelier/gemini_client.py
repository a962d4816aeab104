"""Text generation through Google Gemini."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from atelier.config import API_KEY_ENV_VARS, DEFAULT_MODEL, resolve_api_key
from atelier.errors import UpstreamError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        ...


class GeminiGenerator:
    """Sends one prompt to Gemini and returns the generated text.

    A single attempt per call: no retries, no streaming, and no timeout other
    than the SDK's default.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        client: Any | None = None,
    ) -> None:
        self.api_key = resolve_api_key(api_key, *API_KEY_ENV_VARS)
        self.model = model
        self._client = client

    def _get_client(self):
        if self._client is None:
            from google import genai
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    @property
    def available(self) -> bool:
        return bool(self.api_key) or self._client is not None

    def generate(self, prompt: str) -> str:
        if not self.available:
            raise UpstreamError("Gemini API key not configured")

        try:
            client = self._get_client()
            response = client.models.generate_content(model=self.model, contents=prompt)
        except Exception as e:
            raise UpstreamError(f"Gemini request failed: {e}") from e

        text = getattr(response, "text", None)
        if not text:
            raise UpstreamError("Gemini returned no text")

        logger.info("Generated %d chars with model=%s", len(text), self.model)
        return text
