"""Static prompt text: per-mode system instructions, the business-context block
and the canned greeting shown when a coaching session starts.

Nothing here touches the network; greetings are plain string templating.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict

from coach.models import BusinessContext, Mode

SYSTEM_PROMPTS: Dict[Mode, str] = {
    Mode.CONTENT_PLAN: """You are an expert marketing content strategist. Help users create comprehensive content plans including:
- Content topics and themes aligned with business goals
- Content formats (blog posts, videos, social media, emails, etc.)
- Publishing schedule and frequency
- Distribution channels
- KPIs and success metrics
- Content calendar structure
- SEO optimization strategies
- Engagement tactics

Be specific, actionable, and provide detailed examples. Ask clarifying questions to understand their goals, resources, and constraints.""",
    Mode.PAIN_POINTS: """You are a customer psychology expert specializing in deep audience research. Help users understand their target audience:
- Core pain points and frustrations
- Aspirations, dreams, and desires
- Hidden motivations and fears
- Emotional triggers
- Current situations vs desired situations
- Jobs to be done framework
- Objections and hesitations
- Language and phrases they use

Use empathy, ask probing questions, and help them see beyond surface-level understanding. Create detailed customer avatars and psychographic profiles.""",
    Mode.OFFERS: """You are a conversion optimization and offer creation specialist. Help users craft irresistible offers:
- Strong value propositions
- Clear transformation and outcomes
- Strategic pricing and positioning
- Scarcity and urgency elements
- Risk reversal (guarantees, trials)
- Bonus stacking and package creation
- Payment options
- Compelling copy and messaging
- Call-to-action optimization

Focus on creating offers that are specific, tangible, and address real customer desires. Use proven frameworks like value equation, offer stacking, and urgency triggers.""",
}

CONTEXT_BLOCK_TEMPLATE = (
    "\n\nBusiness Context:\n"
    "- Industry: {industry}\n"
    "- Target Audience: {target_audience}\n"
    "- Product/Service: {product}\n"
    "\n"
    "Use this context to provide highly relevant and personalized advice."
)

GREETINGS: Dict[Mode, str] = {
    Mode.CONTENT_PLAN: (
        "Great! I'll help you build a content plan for your {product} targeting "
        "{target_audience} in the {industry} industry.\n\n"
        "Let's start by understanding:\n"
        "1. What are your main marketing goals? (e.g., brand awareness, lead generation, sales)\n"
        "2. What platforms do you want to focus on?\n"
        "3. How often can you realistically create content?\n\n"
        "Share your thoughts and I'll create a tailored content strategy."
    ),
    Mode.PAIN_POINTS: (
        "Perfect! Let's dive deep into understanding your {target_audience} in the "
        "{industry} space.\n\n"
        "I'll help you uncover:\n"
        "✓ Core pain points and frustrations\n"
        "✓ Deep desires and aspirations\n"
        "✓ Hidden motivations\n"
        "✓ Emotional triggers\n\n"
        "Tell me: What problems do you think your {product} solves? "
        "Even a rough idea helps me go deeper."
    ),
    Mode.OFFERS: (
        "Excellent! Let's craft an irresistible offer for your {product}.\n\n"
        "I'll help you create:\n"
        "✓ Compelling value proposition\n"
        "✓ Strategic pricing and packaging\n"
        "✓ Scarcity and urgency elements\n"
        "✓ Risk reversal strategies\n"
        "✓ Bonus stacking\n\n"
        "First, what's the transformation or outcome your {product} delivers?"
    ),
}


@dataclass(frozen=True)
class ModeCard:
    mode: Mode
    title: str
    description: str


MODE_CARDS = (
    ModeCard(
        Mode.CONTENT_PLAN,
        "Content Plan Builder",
        "Create comprehensive content strategies with topics, formats, and scheduling",
    ),
    ModeCard(
        Mode.PAIN_POINTS,
        "Customer Psychology",
        "Identify pain points, dreams, desires, and motivations of your audience",
    ),
    ModeCard(
        Mode.OFFERS,
        "Irresistible Offers",
        "Craft compelling offers with strong value propositions and urgency",
    ),
)


_PLACEHOLDER = re.compile(r"\{(industry|target_audience|product)\}")


def _fill(template: str, context: BusinessContext) -> str:
    # single pass so user text is inserted verbatim, braces included
    values = {
        "industry": context.industry,
        "target_audience": context.target_audience,
        "product": context.product,
    }
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)


def build_context_block(context: BusinessContext) -> str:
    return _fill(CONTEXT_BLOCK_TEMPLATE, context)


def compose_system_prompt(mode: Mode | str, context: BusinessContext) -> str:
    """Return the mode's instruction template followed by the business-context block.

    Raises InvalidModeError for an unrecognised mode.
    """
    return SYSTEM_PROMPTS[Mode.parse(mode)] + build_context_block(context)


def render_greeting(mode: Mode | str, context: BusinessContext) -> str:
    return _fill(GREETINGS[Mode.parse(mode)], context)


def mode_card(mode: Mode | str) -> ModeCard:
    mode = Mode.parse(mode)
    return next(card for card in MODE_CARDS if card.mode is mode)
