"""HTTP client for the backend `/api/agent` route."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import requests

from coach.config import DEFAULT_BACKEND_URL
from coach.models import BusinessContext, Message, Mode, messages_to_dicts

logger = logging.getLogger(__name__)


class MediatorClientError(RuntimeError):
    pass


class MediatorClient:
    def __init__(
        self,
        backend_url: str = DEFAULT_BACKEND_URL,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.backend_url = backend_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def complete(
        self, mode: Mode, messages: Iterable[Message], context: BusinessContext
    ) -> str:
        payload = {
            "mode": Mode.parse(mode).value,
            "messages": messages_to_dicts(messages),
            "businessInfo": context.to_dict(),
        }
        try:
            r = self.session.post(
                f"{self.backend_url}/api/agent", json=payload, timeout=self.timeout
            )
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            raise MediatorClientError(f"Network error: {e}") from e

        if not isinstance(data, dict):
            raise MediatorClientError("Unexpected response body")
        if data.get("error"):
            raise MediatorClientError(data["error"])
        if not r.ok:
            raise MediatorClientError(f"Backend error: {r.status_code}")
        reply = data.get("response")
        if not isinstance(reply, str):
            raise MediatorClientError("Response is missing the reply text")
        return reply

    def health(self) -> dict:
        r = self.session.get(f"{self.backend_url}/healthz", timeout=5)
        r.raise_for_status()
        return r.json()

    def provider_status(self) -> dict:
        r = self.session.get(f"{self.backend_url}/admin/provider-status", timeout=5)
        r.raise_for_status()
        return r.json()
