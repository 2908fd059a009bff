"""Process configuration read from the environment.

Only `Settings.from_env()` touches `os.environ`; everything downstream gets
its values injected.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_API_VERSION = "2023-06-01"
DEFAULT_BACKEND_URL = "http://127.0.0.1:8000"


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric COACH_PROVIDER_TIMEOUT=%r", raw)
        return None


@dataclass(frozen=True)
class Settings:
    anthropic_api_key: str = ""
    model: str = DEFAULT_MODEL
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    # None means no timeout at all
    provider_timeout: Optional[float] = None
    backend_url: str = DEFAULT_BACKEND_URL

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            anthropic_api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
            model=os.environ.get("COACH_MODEL") or DEFAULT_MODEL,
            api_url=os.environ.get("ANTHROPIC_API_URL") or DEFAULT_API_URL,
            api_version=os.environ.get("ANTHROPIC_VERSION") or DEFAULT_API_VERSION,
            provider_timeout=_optional_float(os.environ.get("COACH_PROVIDER_TIMEOUT")),
            backend_url=os.environ.get("BACKEND_URL") or DEFAULT_BACKEND_URL,
        )
