"""Thin async wrapper around the Anthropic Messages API.

Behavior:
- One POST per call to the configured endpoint, no retries.
- Non-2xx replies raise UpstreamError (status and raw body are logged).
- Network failures and non-JSON bodies raise TransportError.
- `extract_reply_text` turns the provider payload into the reply string,
  raising ExtractionError when the payload does not carry any text.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from coach.config import DEFAULT_API_URL, DEFAULT_API_VERSION, DEFAULT_MODEL
from coach.errors import ExtractionError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

MAX_TOKENS = 2048


class AnthropicClient:
    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        api_url: str = DEFAULT_API_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.api_version = api_version
        self.timeout = timeout
        # injectable for tests (httpx.MockTransport)
        self._transport = transport

    def headers(self) -> Dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }

    def build_payload(self, system: str, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "system": system,
            "messages": messages,
        }

    async def create_message(self, system: str, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        """POST one Messages API request and return the decoded JSON body."""
        payload = self.build_payload(system, messages)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                r = await client.post(self.api_url, headers=self.headers(), json=payload)
        except httpx.HTTPError as e:
            logger.error("Anthropic request failed before a reply arrived: %s", e)
            raise TransportError(f"Network error calling Anthropic API: {e}") from e

        if r.status_code < 200 or r.status_code >= 300:
            logger.error("Anthropic API error: status=%d body=%s", r.status_code, r.text)
            raise UpstreamError(r.status_code, r.text)

        try:
            data = r.json()
        except ValueError as e:
            logger.error("Anthropic API returned a non-JSON body: %s", r.text[:500])
            raise TransportError("Anthropic API returned a non-JSON body") from e
        logger.info("Anthropic reply received (status=%d)", r.status_code)
        return data


def extract_reply_text(data: Any) -> str:
    """Return the first text segment of the provider's `content` array."""
    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, list) or not content:
        raise ExtractionError("Provider response has no content blocks")
    for block in content:
        if isinstance(block, dict) and isinstance(block.get("text"), str):
            return block["text"]
    raise ExtractionError("Provider response has no text content block")
