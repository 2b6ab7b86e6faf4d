from __future__ import annotations

import re

from .model import ContentKind

_MARKDOWN_PATTERNS = (
    re.compile(r"^#{1,6}\s", re.MULTILINE),
    re.compile(r"\*\*[^*\n]+\*\*"),
    re.compile(r"\*[^*\n]+\*"),
    re.compile(r"~~[^~\n]+~~"),
    re.compile(r"`[^`\n]+`"),
    re.compile(r"^[-*+]\s", re.MULTILINE),
    re.compile(r"^\d+\.\s", re.MULTILINE),
    re.compile(r"\[[^\]\n]+\]\([^)\s]+\)"),
    re.compile(r"^>\s", re.MULTILINE),
    re.compile(r"```[\s\S]*?```"),
)

_HTML_TAG_RE = re.compile(r"</?[a-z][\s\S]*?>", re.IGNORECASE)


def is_markdown(text: str) -> bool:
    return any(pattern.search(text) for pattern in _MARKDOWN_PATTERNS)


def is_html(text: str) -> bool:
    return _HTML_TAG_RE.search(text) is not None


def classify(text: str) -> ContentKind:
    """Markdown wins over HTML when both signals are present."""
    if is_markdown(text):
        return ContentKind.MARKDOWN
    if is_html(text):
        return ContentKind.HTML
    return ContentKind.PLAIN
