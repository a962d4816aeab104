"""Serverless entrypoint for the Gemini prompt gateway.

The platform calls ``handler(event, context)`` once per HTTP request. The
Gemini API key is read from the environment when this module is first
imported (cold start).
"""

from __future__ import annotations

import logging
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from atelier.config import get_settings
from atelier.gateway import PromptGateway
from atelier.gemini_client import GeminiGenerator

settings = get_settings()
logging.basicConfig(level=settings.log_level)

gateway = PromptGateway(
    GeminiGenerator(api_key=settings.gemini_api_key, model=settings.gemini_model)
)


def handler(event, context=None):
    """Serverless function handler."""
    return gateway.handle(event)
