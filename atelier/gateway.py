"""Prompt gateway: turns a calculator request into generated text."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

from atelier.errors import ErrorKind, GatewayError, RequestParseError
from atelier.gemini_client import TextGenerator
from atelier.models import GenerationResponse, parse_request
from atelier.prompt_builder import build_prompt

logger = logging.getLogger(__name__)

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

GENERIC_ERROR_MESSAGE = "Ocorreu um erro ao processar sua solicitação."


def _read_body(event: dict[str, Any]) -> str | bytes | None:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise RequestParseError(f"Body is not valid base64: {e}") from e
    return body


class PromptGateway:
    """Stateless handler for one serverless invocation at a time."""

    def __init__(self, generator: TextGenerator) -> None:
        self.generator = generator

    def handle(self, event: dict[str, Any]) -> dict[str, Any]:
        method = str(event.get("httpMethod") or "").upper()
        if method == "OPTIONS":
            return {"statusCode": 204, "headers": dict(CORS_HEADERS)}

        try:
            request = parse_request(_read_body(event))
            prompt = build_prompt(request)
            text = self.generator.generate(prompt)
        except GatewayError as e:
            logger.error("Gemini function error [%s]: %s", e.kind.value, e)
            return self._respond(500, GenerationResponse(error=GENERIC_ERROR_MESSAGE))
        except Exception:
            logger.exception("Gemini function error [%s]", ErrorKind.INTERNAL.value)
            return self._respond(500, GenerationResponse(error=GENERIC_ERROR_MESSAGE))

        logger.info("Served %s request", request.request_type.value)
        return self._respond(200, GenerationResponse(text=text))

    @staticmethod
    def _respond(status: int, payload: GenerationResponse) -> dict[str, Any]:
        return {
            "statusCode": status,
            "headers": {**CORS_HEADERS, "Content-Type": "application/json"},
            "body": payload.to_json(),
        }
