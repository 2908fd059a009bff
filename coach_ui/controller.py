"""Conversation controller: one coaching session held in memory.

Flow: IDLE (mode picker) -> COLLECTING_CONTEXT (business form) -> CHATTING.
Messages are only ever appended; at most one mediator request is in flight.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Protocol

from coach.models import BusinessContext, Message, Mode
from coach.prompts import render_greeting

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I apologize, but I encountered an error. Please try again."


class Stage(str, Enum):
    IDLE = "idle"
    COLLECTING_CONTEXT = "collecting_context"
    CHATTING = "chatting"


class BusinessContextError(ValueError):
    pass


class Completer(Protocol):
    def complete(
        self, mode: Mode, messages: List[Message], context: BusinessContext
    ) -> str: ...


class ConversationController:
    def __init__(self, client: Completer):
        self.client = client
        self.reset()

    def reset(self) -> None:
        self.stage = Stage.IDLE
        self.mode: Optional[Mode] = None
        self.context: Optional[BusinessContext] = None
        self.transcript: List[Message] = []
        self.pending = False

    def select_mode(self, mode: Mode | str) -> None:
        """Start a new session for `mode`; the business form comes next."""
        mode = Mode.parse(mode)
        self.reset()
        self.mode = mode
        self.stage = Stage.COLLECTING_CONTEXT

    def submit_business_context(self, context: BusinessContext) -> Message:
        """Store the context and seed the transcript with the mode's greeting.

        Raises BusinessContextError, leaving the session untouched, if a field
        is empty or no mode is waiting for context.
        """
        if self.stage is not Stage.COLLECTING_CONTEXT:
            raise BusinessContextError("Select a coaching mode first")
        if not context.is_complete():
            raise BusinessContextError("Please fill in all business information fields")
        greeting = Message(role="assistant", content=render_greeting(self.mode, context))
        self.context = context
        self.transcript = [greeting]
        self.stage = Stage.CHATTING
        return greeting

    def send_message(self, text: str) -> Optional[Message]:
        """Append `text` and the mediator's reply; returns the reply or None if ignored."""
        if self.stage is not Stage.CHATTING or self.pending:
            return None
        if not text or not text.strip():
            return None

        transcript = self.transcript
        transcript.append(Message(role="user", content=text))
        self.pending = True
        try:
            reply_text = self.client.complete(self.mode, list(transcript), self.context)
            reply = Message(role="assistant", content=reply_text)
        except Exception as e:
            logger.error("Mediator call failed: %s", e)
            reply = Message(role="assistant", content=FALLBACK_REPLY)
        finally:
            # a reset() during the call leaves the new session untouched
            if self.transcript is transcript:
                self.pending = False
        transcript.append(reply)
        return reply
