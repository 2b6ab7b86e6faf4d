from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union


class ContentKind(enum.Enum):
    MARKDOWN = "markdown"
    HTML = "html"
    PLAIN = "plain"


@dataclass(frozen=True)
class InlineElement:
    """Base class for inline tokens."""

    text: str


@dataclass(frozen=True)
class InlineText(InlineElement):
    pass


@dataclass(frozen=True)
class InlineBold(InlineElement):
    pass


@dataclass(frozen=True)
class InlineItalic(InlineElement):
    pass


@dataclass(frozen=True)
class InlineStrikethrough(InlineElement):
    pass


@dataclass(frozen=True)
class InlineCode(InlineElement):
    pass


@dataclass(frozen=True)
class InlineLink(InlineElement):
    url: str = ""


Inlines = Tuple[InlineElement, ...]


@dataclass(frozen=True)
class Block:
    """Base class for block tokens produced by the Markdown parser."""


@dataclass(frozen=True)
class Heading(Block):
    level: int
    content: Inlines


@dataclass(frozen=True)
class Paragraph(Block):
    # Empty content marks a blank line.
    content: Inlines = ()


@dataclass(frozen=True)
class ListItem:
    content: Inlines
    indent: int = 0


@dataclass(frozen=True)
class ListBlock(Block):
    ordered: bool
    items: Tuple[ListItem, ...]


@dataclass(frozen=True)
class Blockquote(Block):
    content: Inlines


@dataclass(frozen=True)
class CodeBlock(Block):
    content: str


@dataclass(frozen=True)
class HtmlText:
    text: str


@dataclass(frozen=True)
class HtmlElement:
    tag: str
    children: Tuple[Union["HtmlElement", HtmlText], ...] = ()

    @property
    def text_content(self) -> str:
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, HtmlText):
                parts.append(child.text)
            else:
                parts.append(child.text_content)
        return "".join(parts)


@dataclass(frozen=True)
class StyledRun:
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    is_code: bool = False
    link_url: Optional[str] = None


Runs = Tuple[StyledRun, ...]


@dataclass(frozen=True)
class RichBlock:
    """Base class for renderer output blocks."""


@dataclass(frozen=True)
class _RunsBlock(RichBlock):
    runs: Runs

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class RichHeading(_RunsBlock):
    level: int = 1


@dataclass(frozen=True)
class RichParagraph(_RunsBlock):
    pass


@dataclass(frozen=True)
class RichListItem(_RunsBlock):
    ordered: bool = False
    indent: int = 0


@dataclass(frozen=True)
class RichQuoteLine(_RunsBlock):
    pass


@dataclass(frozen=True)
class RichCodeBlock(RichBlock):
    text: str


@dataclass(frozen=True)
class StyleRange:
    """Styles applied over the half-open offset range ``[start, end)``."""

    start: int
    end: int
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    code: bool = False
    link_url: Optional[str] = None

    @property
    def length(self) -> int:
        return self.end - self.start
