from __future__ import annotations

import logging
from typing import List, Tuple

from .classifier import classify
from .errors import HtmlParseError
from .html_parser import parse_elements, sanitize
from .markdown_parser import parse_markdown
from .model import ContentKind, RichBlock
from .rich_text import render_html, render_markdown, render_plain

logger = logging.getLogger(__name__)


def convert_with_kind(text: str, strict: bool = False) -> Tuple[ContentKind, List[RichBlock]]:
    kind = classify(text)
    logger.debug("Content classified as %s (%d chars)", kind.value, len(text))
    if kind is ContentKind.MARKDOWN:
        return kind, render_markdown(parse_markdown(text))
    if kind is ContentKind.HTML:
        sanitized = sanitize(text)
        logger.debug("Sanitized HTML: %r", sanitized)
        try:
            tree = parse_elements(sanitized)
        except HtmlParseError as exc:
            if strict:
                raise
            logger.warning("Falling back to plain text: %s", exc)
            return ContentKind.PLAIN, render_plain(text)
        return kind, render_html(tree)
    return kind, render_plain(text)


def convert(text: str, strict: bool = False) -> List[RichBlock]:
    """Classify ``text`` and render it to rich blocks.

    Markup the HTML tree builder rejects is rendered as plain text unless
    ``strict`` is set, in which case :class:`HtmlParseError` propagates.
    """
    return convert_with_kind(text, strict=strict)[1]
