"""Prompt builder that converts gateway requests into generation prompts."""

from __future__ import annotations

import logging

from atelier.models import DescriptionRequest, GenerationRequest, SuggestionsRequest
from prompts.templates import MATERIALS_SEPARATOR, TEMPLATES

logger = logging.getLogger(__name__)


def build_prompt(request: GenerationRequest) -> str:
    """Render the template registered for the request's type."""
    template = TEMPLATES[request.request_type.value]

    if isinstance(request, DescriptionRequest):
        prompt = template.safe_substitute(
            piece_name=request.piece_name,
            final_price=request.final_price,
            materials=MATERIALS_SEPARATOR.join(request.materials),
        )
    elif isinstance(request, SuggestionsRequest):
        prompt = template.safe_substitute(
            piece_name=request.piece_name,
            final_price=request.final_price,
        )
    else:
        raise TypeError(f"Unsupported request: {type(request).__name__}")

    logger.debug("Built %s prompt (%d chars)", request.request_type.value, len(prompt))
    return prompt
