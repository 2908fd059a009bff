"""Shared UI helpers for the chat view.

Transcript text is shown as typed: markdown syntax is escaped and line
breaks are kept.
"""

from __future__ import annotations

import re

_MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~$])")


def verbatim_markdown(text: str) -> str:
    """Return markdown that renders `text` literally, newlines included."""
    escaped = _MARKDOWN_SPECIAL.sub(r"\\\1", text)
    # two trailing spaces force a hard line break
    return escaped.replace("\n", "  \n")
