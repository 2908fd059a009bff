"""Completion mediator: mode + transcript + business context in, reply text out.

The mediator is stateless per call. Its only long-lived input is the provider
credential, handed in at construction time.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Union

from coach.anthropic_api import AnthropicClient, extract_reply_text
from coach.config import Settings
from coach.errors import MisconfiguredError
from coach.models import BusinessContext, Message, Mode, messages_to_dicts
from coach.prompts import compose_system_prompt

logger = logging.getLogger(__name__)

MessageLike = Union[Message, Mapping[str, str]]


class CompletionMediator:
    def __init__(self, api_key: str, client: Optional[AnthropicClient] = None):
        self.api_key = api_key or ""
        self.client = client or AnthropicClient(self.api_key)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionMediator":
        client = AnthropicClient(
            settings.anthropic_api_key,
            model=settings.model,
            api_url=settings.api_url,
            api_version=settings.api_version,
            timeout=settings.provider_timeout,
        )
        return cls(settings.anthropic_api_key, client=client)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def complete(
        self,
        mode: Union[Mode, str],
        messages: Iterable[MessageLike],
        context: BusinessContext,
    ) -> str:
        """Send one request to the provider and return the reply text.

        Raises a MediatorError subclass on any failure.
        """
        if not self.configured:
            raise MisconfiguredError("API key not configured")
        mode = Mode.parse(mode)
        # rebuilt on every call
        system = compose_system_prompt(mode, context)
        provider_messages = messages_to_dicts(messages)
        logger.info(
            "Mediating completion mode=%s messages=%d", mode.value, len(provider_messages)
        )
        data = await self.client.create_message(system, provider_messages)
        return extract_reply_text(data)
