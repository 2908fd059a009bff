"""coach: completion mediation for the Marketing Coach Agent.

Prompt templates, the Anthropic Messages API client and the mediator that
ties them together. The HTTP surface lives in ``backend.main``.
"""

__all__ = [
    "anthropic_api",
    "config",
    "errors",
    "mediator",
    "models",
    "prompts",
]
