"""Error types for the prompt gateway and the offline cache manager."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    PARSE = "parse"
    VALIDATION = "validation"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class GatewayError(Exception):
    """Base class for failures while serving a generation request.

    ``kind`` is only used for logging; callers always receive the same
    generic error body.
    """

    kind: ErrorKind = ErrorKind.INTERNAL


class RequestParseError(GatewayError):
    """The body is missing, not JSON, or not a JSON object."""

    kind = ErrorKind.PARSE


class InvalidRequestType(GatewayError):
    """Unknown ``type`` discriminator or a required field is missing."""

    kind = ErrorKind.VALIDATION


class UpstreamError(GatewayError):
    """The generative-text API failed or returned no text."""

    kind = ErrorKind.UPSTREAM


class CacheError(Exception):
    """Base class for offline cache failures."""


class InstallError(CacheError):
    """A precached asset could not be fetched; nothing was stored."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to precache {url}: {reason}")
        self.url = url
        self.reason = reason
