"""Error taxonomy for the completion mediator.

Every failure carries a `kind` so logs can tell causes apart, while the HTTP
layer collapses them into one opaque error body.
"""

from __future__ import annotations


class MediatorError(RuntimeError):
    kind = "mediator"


class MisconfiguredError(MediatorError):
    kind = "misconfigured"


class InvalidModeError(MediatorError, ValueError):
    kind = "invalid_mode"


class UpstreamError(MediatorError):
    """Non-2xx reply from the provider."""

    kind = "upstream"

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API request failed: {status_code}")
        self.status_code = status_code
        self.body = body


class TransportError(MediatorError):
    kind = "transport"


class ExtractionError(MediatorError):
    kind = "extraction"
