"""Core value types shared by the mediator and the conversation controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal

from coach.errors import InvalidModeError

Role = Literal["user", "assistant"]


class Mode(str, Enum):
    CONTENT_PLAN = "content-plan"
    PAIN_POINTS = "pain-points"
    OFFERS = "offers"

    @classmethod
    def parse(cls, value: "Mode | str | None") -> "Mode":
        """Return the Mode for `value`, raising InvalidModeError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            raise InvalidModeError(f"Unknown mode: {value!r}") from None


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class BusinessContext:
    industry: str
    target_audience: str
    product: str

    def is_complete(self) -> bool:
        return all(
            isinstance(v, str) and v != ""
            for v in (self.industry, self.target_audience, self.product)
        )

    def to_dict(self) -> Dict[str, str]:
        """Wire shape used by the HTTP API (camelCase keys)."""
        return {
            "industry": self.industry,
            "targetAudience": self.target_audience,
            "product": self.product,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BusinessContext":
        return cls(
            industry=data.get("industry", "") or "",
            target_audience=data.get("targetAudience", "") or "",
            product=data.get("product", "") or "",
        )


def messages_to_dicts(messages) -> list[Dict[str, str]]:
    """Translate messages to provider `{role, content}` pairs, keeping order."""
    out = []
    for m in messages:
        if isinstance(m, Message):
            out.append(m.to_dict())
        else:
            out.append({"role": m["role"], "content": m["content"]})
    return out


__all__ = ["Role", "Mode", "Message", "BusinessContext", "messages_to_dicts"]
