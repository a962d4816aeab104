"""Request and response models for the prompt gateway."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from atelier.errors import InvalidRequestType, RequestParseError


class RequestType(str, Enum):
    DESCRIPTION = "description"
    SUGGESTIONS = "suggestions"


@dataclass(frozen=True)
class DescriptionRequest:
    """Instagram caption for a piece, mentioning the materials it is made of."""

    request_type: ClassVar[RequestType] = RequestType.DESCRIPTION

    piece_name: str
    final_price: str
    materials: tuple[str, ...]


@dataclass(frozen=True)
class SuggestionsRequest:
    """Three practical tips for selling a piece."""

    request_type: ClassVar[RequestType] = RequestType.SUGGESTIONS

    piece_name: str
    final_price: str


GenerationRequest = DescriptionRequest | SuggestionsRequest


@dataclass(frozen=True)
class GenerationResponse:
    text: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, str]:
        if self.error is not None:
            return {"error": self.error}
        return {"text": self.text or ""}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


def _require(data: dict[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None:
        raise InvalidRequestType(f"Missing required field '{key}'")
    return value


def _parse_materials(data: dict[str, Any]) -> tuple[str, ...]:
    materials = _require(data, "materials")
    if isinstance(materials, str) or not isinstance(materials, (list, tuple)):
        raise InvalidRequestType("Field 'materials' must be a list")
    if not materials:
        raise InvalidRequestType("Field 'materials' must not be empty")
    return tuple(str(m) for m in materials)


def parse_request(body: str | bytes | None) -> GenerationRequest:
    """Decode a JSON body into one of the request variants.

    Values are taken verbatim: no escaping or trimming, only presence checks.
    """
    if body is None or body == "" or body == b"":
        raise RequestParseError("Request body is empty")
    try:
        data = json.loads(body)
    except (ValueError, TypeError) as e:
        raise RequestParseError(f"Request body is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise RequestParseError("Request body must be a JSON object")
    return request_from_dict(data)


def request_from_dict(data: dict[str, Any]) -> GenerationRequest:
    raw_type = data.get("type")
    try:
        request_type = RequestType(raw_type)
    except ValueError:
        raise InvalidRequestType(f"Invalid request type: {raw_type!r}") from None

    piece_name = str(_require(data, "pieceName"))
    final_price = str(_require(data, "finalPrice"))

    if request_type is RequestType.DESCRIPTION:
        return DescriptionRequest(
            piece_name=piece_name,
            final_price=final_price,
            materials=_parse_materials(data),
        )
    return SuggestionsRequest(piece_name=piece_name, final_price=final_price)
