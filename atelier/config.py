"""Settings for the prompt gateway and the offline cache manager."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash-preview-05-20"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


def resolve_api_key(explicit: str | None, *env_names: str) -> str:
    """Return the explicit key if non-blank, else the first non-empty env var."""
    if explicit and explicit.strip():
        return explicit.strip()
    for name in env_names:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


def _log_level_from_env() -> str:
    """LOG_LEVEL by name; unknown names fall back to INFO."""
    name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        return "INFO"
    return name


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read once when the function cold-starts."""

    gemini_api_key: str = field(default_factory=lambda: resolve_api_key(None, *API_KEY_ENV_VARS))
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", DEFAULT_MODEL))
    log_level: str = field(default_factory=_log_level_from_env)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@dataclass(frozen=True)
class CacheConfig:
    """One cache generation: its version-tagged name and the assets it precaches.

    Relative entries of ``precache_urls`` are resolved against ``origin``;
    absolute ones (CDN assets) are fetched as given.
    """

    cache_name: str
    precache_urls: tuple[str, ...]
    origin: str = "http://localhost"
    skip_waiting: bool = True
    claim_clients: bool = True

    def __post_init__(self) -> None:
        if not self.cache_name:
            raise ValueError("cache_name must not be empty")
        # lists from JSON or callers are frozen into a tuple
        object.__setattr__(self, "precache_urls", tuple(self.precache_urls))

    @classmethod
    def from_json(cls, path: str | Path) -> CacheConfig:
        """Load a cache configuration from a JSON file."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return cls(
            cache_name=data["cache_name"],
            precache_urls=tuple(data.get("precache_urls", [])),
            origin=data.get("origin", "http://localhost"),
            skip_waiting=data.get("skip_waiting", True),
            claim_clients=data.get("claim_clients", True),
        )


DEFAULT_CACHE_CONFIG = CacheConfig(
    cache_name="arttesdabel-cache-v1",
    precache_urls=("/", "/index.html", "/assets/logo.png"),
)
