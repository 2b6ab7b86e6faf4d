from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

from .model import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    HtmlElement,
    HtmlText,
    InlineBold,
    InlineCode,
    InlineElement,
    InlineItalic,
    InlineLink,
    InlineStrikethrough,
    ListBlock,
    Paragraph,
    RichBlock,
    RichCodeBlock,
    RichHeading,
    RichListItem,
    RichParagraph,
    RichQuoteLine,
    StyledRun,
)

HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}
LIST_TAGS = {"ul", "ol"}
BLOCK_CONTAINER_TAGS = {"p", "div"}


def runs_from_inlines(inlines: Iterable[InlineElement]) -> tuple[StyledRun, ...]:
    runs: List[StyledRun] = []
    for inline in inlines:
        if isinstance(inline, InlineBold):
            runs.append(StyledRun(inline.text, bold=True))
        elif isinstance(inline, InlineItalic):
            runs.append(StyledRun(inline.text, italic=True))
        elif isinstance(inline, InlineStrikethrough):
            runs.append(StyledRun(inline.text, strikethrough=True))
        elif isinstance(inline, InlineCode):
            runs.append(StyledRun(inline.text, is_code=True))
        elif isinstance(inline, InlineLink):
            runs.append(StyledRun(inline.text, link_url=inline.url))
        else:
            runs.append(StyledRun(inline.text))
    return tuple(runs)


def render_markdown(blocks: Iterable[Block]) -> List[RichBlock]:
    result: List[RichBlock] = []
    for block in blocks:
        if isinstance(block, Heading):
            result.append(RichHeading(runs=runs_from_inlines(block.content), level=block.level))
        elif isinstance(block, Paragraph):
            # Blank-line markers carry no content and produce no output block.
            if block.content:
                result.append(RichParagraph(runs=runs_from_inlines(block.content)))
        elif isinstance(block, ListBlock):
            for item in block.items:
                result.append(
                    RichListItem(
                        runs=runs_from_inlines(item.content),
                        ordered=block.ordered,
                        indent=item.indent,
                    )
                )
        elif isinstance(block, Blockquote):
            result.append(RichQuoteLine(runs=runs_from_inlines(block.content)))
        elif isinstance(block, CodeBlock):
            result.append(RichCodeBlock(text=block.content))
    return result


def render_plain(text: str) -> List[RichBlock]:
    return [RichParagraph(runs=(StyledRun(text),))]


@dataclass(frozen=True)
class HtmlStyle:
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def run(self, text: str) -> StyledRun:
        return StyledRun(text, bold=self.bold, italic=self.italic, underline=self.underline)


_INLINE_STYLE_FLAGS = {"b": "bold", "i": "italic", "u": "underline"}


def render_html(tree: HtmlElement) -> List[RichBlock]:
    renderer = _HtmlRenderer()
    renderer.walk(tree, HtmlStyle())
    renderer.close_paragraph()
    return renderer.blocks


class _HtmlRenderer:
    """Walks a sanitized element tree, collecting rich blocks in order.

    Style is passed down as an immutable value, so a sibling never sees the
    style of the element before it.
    """

    def __init__(self) -> None:
        self.blocks: List[RichBlock] = []
        self._paragraph: Optional[List[StyledRun]] = None
        self._pending_space: Optional[HtmlStyle] = None

    def open_paragraph(self) -> List[StyledRun]:
        if self._paragraph is None:
            self._paragraph = []
        return self._paragraph

    def close_paragraph(self) -> None:
        if self._paragraph:
            self.blocks.append(RichParagraph(runs=tuple(self._paragraph)))
        self._paragraph = None
        self._pending_space = None

    def _append(self, run: StyledRun) -> None:
        paragraph = self.open_paragraph()
        if self._pending_space is not None:
            paragraph.append(self._pending_space.run(" "))
            self._pending_space = None
        paragraph.append(run)

    def _paragraph_text(self) -> str:
        return "".join(run.text for run in self._paragraph or [])

    def walk(self, element: HtmlElement, style: HtmlStyle) -> None:
        for child in element.children:
            if isinstance(child, HtmlText):
                self._text(child.text, style)
            else:
                self._element(child, style)

    def _text(self, text: str, style: HtmlStyle) -> None:
        if not text.strip():
            # Whitespace between tags collapses to one space, kept only between words.
            if self._paragraph:
                self._pending_space = style
            return
        self._append(style.run(text))

    def _element(self, child: HtmlElement, style: HtmlStyle) -> None:
        tag = child.tag
        if tag in _INLINE_STYLE_FLAGS:
            self.open_paragraph()
            self.walk(child, replace(style, **{_INLINE_STYLE_FLAGS[tag]: True}))
        elif tag in BLOCK_CONTAINER_TAGS:
            self.close_paragraph()
            self.open_paragraph()
            self.walk(child, style)
        elif tag in HEADING_TAGS:
            had_content = bool(self._paragraph_text().strip())
            self.close_paragraph()
            if had_content:
                self.blocks.append(RichParagraph(runs=()))
            self.blocks.append(
                RichHeading(runs=(StyledRun(child.text_content),), level=HEADING_TAGS[tag])
            )
        elif tag in LIST_TAGS:
            self.close_paragraph()
            self._list(child, ordered=tag == "ol", depth=0, style=style)
        elif tag == "li":
            self.close_paragraph()
            self._list_item(child, ordered=False, depth=0, style=style)
        elif tag == "br":
            if self._paragraph is not None:
                self._pending_space = None
                self._paragraph.append(StyledRun("\n"))
        else:
            text = child.text_content
            if text:
                joined = bool(self._paragraph) and self._pending_space is None
                self._append(style.run(f" {text}" if joined else text))

    def _list(self, element: HtmlElement, ordered: bool, depth: int, style: HtmlStyle) -> None:
        for child in element.children:
            if isinstance(child, HtmlText):
                continue
            if child.tag == "li":
                self._list_item(child, ordered, depth, style)
            elif child.tag in LIST_TAGS:
                self._list(child, ordered=child.tag == "ol", depth=depth + 1, style=style)

    def _list_item(self, item: HtmlElement, ordered: bool, depth: int, style: HtmlStyle) -> None:
        runs: List[StyledRun] = []
        nested: List[HtmlElement] = []
        _collect_item_runs(item, style, runs, nested)
        self.blocks.append(RichListItem(runs=_trim_runs(runs), ordered=ordered, indent=depth))
        for sublist in nested:
            self._list(sublist, ordered=sublist.tag == "ol", depth=depth + 1, style=style)


def _collect_item_runs(
    element: HtmlElement, style: HtmlStyle, runs: List[StyledRun], nested: List[HtmlElement]
) -> None:
    for child in element.children:
        if isinstance(child, HtmlText):
            runs.append(style.run(child.text))
        elif child.tag in LIST_TAGS:
            nested.append(child)
        elif child.tag == "br":
            runs.append(StyledRun("\n"))
        elif child.tag in _INLINE_STYLE_FLAGS:
            _collect_item_runs(child, replace(style, **{_INLINE_STYLE_FLAGS[child.tag]: True}), runs, nested)
        else:
            _collect_item_runs(child, style, runs, nested)


def _trim_runs(runs: List[StyledRun]) -> tuple[StyledRun, ...]:
    """Strip layout whitespace from both ends of a list item's runs."""
    trimmed = [run for run in runs if run.text]
    if trimmed:
        trimmed[0] = replace(trimmed[0], text=trimmed[0].text.lstrip())
        trimmed[-1] = replace(trimmed[-1], text=trimmed[-1].text.rstrip())
    return tuple(run for run in trimmed if run.text)
