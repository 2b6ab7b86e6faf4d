from __future__ import annotations

import re
from typing import Callable, List, Tuple

from .model import (
    InlineBold,
    InlineCode,
    InlineElement,
    InlineItalic,
    InlineLink,
    InlineStrikethrough,
    InlineText,
)

# Order matters: on a tie for the earliest start the first pattern wins.
_INLINE_PATTERNS: Tuple[Tuple[re.Pattern[str], Callable[[re.Match[str]], InlineElement]], ...] = (
    (re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)"), lambda m: InlineLink(m.group(1), url=m.group(2))),
    (re.compile(r"`([^`]+)`"), lambda m: InlineCode(m.group(1))),
    (re.compile(r"\*\*(.+?)\*\*"), lambda m: InlineBold(m.group(1))),
    (re.compile(r"\*([^*]+)\*"), lambda m: InlineItalic(m.group(1))),
    (re.compile(r"~~(.+?)~~"), lambda m: InlineStrikethrough(m.group(1))),
)


def tokenize_inline(text: str) -> List[InlineElement]:
    """Split one line of Markdown into inline tokens.

    The earliest match among the inline patterns is taken at each step; text in
    front of it becomes an ``InlineText`` token. Delimiters without a partner
    are left in the text as typed.
    """
    tokens: List[InlineElement] = []
    pos = 0
    while pos < len(text):
        best: re.Match[str] | None = None
        best_factory = None
        for pattern, factory in _INLINE_PATTERNS:
            match = pattern.search(text, pos)
            if match is None:
                continue
            if best is None or match.start() < best.start():
                best = match
                best_factory = factory
        if best is None:
            tokens.append(InlineText(text[pos:]))
            break
        if best.start() > pos:
            tokens.append(InlineText(text[pos : best.start()]))
        tokens.append(best_factory(best))
        pos = best.end()
    return tokens


def inline_plain_text(tokens: List[InlineElement]) -> str:
    return "".join(token.text for token in tokens)
