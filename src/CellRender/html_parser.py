from __future__ import annotations

import re
from typing import List, Union
from xml.etree import ElementTree as ET

from .errors import HtmlParseError
from .model import HtmlElement, HtmlText

ALLOWED_TAGS = frozenset(
    {"b", "i", "u", "ul", "ol", "li", "div", "p", "br", "h1", "h2", "h3", "h4", "h5", "h6"}
)

_TAG_RE = re.compile(r"</?([a-z][a-z0-9]*)\b[^>]*>", re.IGNORECASE)
_VOID_BR_RE = re.compile(r"<br\b[^>]*>", re.IGNORECASE)
_BR_CLOSE_RE = re.compile(r"</br\s*>", re.IGNORECASE)


def sanitize(html: str) -> str:
    """Drop every tag marker outside ``ALLOWED_TAGS``, keeping the text between them."""

    def _keep_allowed(match: re.Match[str]) -> str:
        return match.group(0) if match.group(1).lower() in ALLOWED_TAGS else ""

    # Removing a marker can join its neighbours into a new tag, so repeat until stable.
    while True:
        cleaned = _TAG_RE.sub(_keep_allowed, html)
        if cleaned == html:
            return cleaned
        html = cleaned


def parse_elements(sanitized_html: str) -> HtmlElement:
    """Build an element tree under a synthetic ``div`` root.

    The markup must be well formed apart from bare ``<br>`` tags; anything the
    tree builder rejects raises :class:`HtmlParseError`.
    """
    # Closing </br> markers go first so every <br> can be rewritten as void.
    markup = _VOID_BR_RE.sub("<br/>", _BR_CLOSE_RE.sub("", sanitized_html))
    try:
        root = ET.fromstring(f"<div>{markup}</div>")
    except ET.ParseError as exc:
        raise HtmlParseError(f"Cannot parse HTML content: {exc}") from exc
    return _convert(root)


def _convert(node: ET.Element) -> HtmlElement:
    children: List[Union[HtmlElement, HtmlText]] = []
    if node.text:
        children.append(HtmlText(node.text))
    for child in node:
        children.append(_convert(child))
        if child.tail:
            children.append(HtmlText(child.tail))
    return HtmlElement(tag=node.tag.lower(), children=tuple(children))


_DASH_PREFIX_RE = re.compile(r"^(-+)\s*")


def wrap_lines_in_html_list(text: str) -> str:
    """Turn dash-prefixed lines into nested ``<ul>`` markup.

    The number of leading dashes is the nesting level. A first line without
    dashes is kept as an introductory paragraph.
    """
    if not text.strip():
        return ""
    output: list[str] = []
    prev_level = 0
    for index, line in enumerate(text.splitlines()):
        stripped = line.strip()
        match = _DASH_PREFIX_RE.match(stripped)
        level = len(match.group(1)) if match else 0
        if index == 0 and level == 0:
            output.append(f"<p>{stripped}</p>\n")
            continue
        while prev_level < level:
            output.append("<ul>")
            prev_level += 1
        while prev_level > level:
            output.append("</ul>")
            prev_level -= 1
        output.append(f"<li>{_DASH_PREFIX_RE.sub('', stripped)}</li>")
    output.append("</ul>" * prev_level)
    return "".join(output)
