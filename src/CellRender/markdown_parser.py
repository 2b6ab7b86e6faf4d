from __future__ import annotations

import re
from typing import List, Optional

from .inline_parser import tokenize_inline
from .model import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    ListBlock,
    ListItem,
    Paragraph,
)

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_LIST_ITEM_RE = re.compile(r"^(\s*)([-*+]|\d+\.)\s+(.*)$")
_BLOCKQUOTE_RE = re.compile(r"^>\s*(.+)$")
_FENCE = "```"

INDENT_WIDTH = 2


class _OpenList:
    def __init__(self, ordered: bool) -> None:
        self.ordered = ordered
        self.items: list[ListItem] = []

    def freeze(self) -> ListBlock:
        return ListBlock(ordered=self.ordered, items=tuple(self.items))


def parse_markdown(content: str) -> List[Block]:
    blocks: List[Block] = []
    current_list: Optional[_OpenList] = None
    in_fence = False
    code_lines: list[str] = []

    def flush_list() -> None:
        nonlocal current_list
        if current_list is not None:
            blocks.append(current_list.freeze())
            current_list = None

    for line in content.splitlines():
        if line.strip().startswith(_FENCE):
            if in_fence:
                blocks.append(CodeBlock(content="\n".join(code_lines)))
                code_lines = []
            else:
                flush_list()
            in_fence = not in_fence
            continue
        if in_fence:
            code_lines.append(line)
            continue

        if not line.strip():
            flush_list()
            blocks.append(Paragraph(content=()))
            continue

        heading = _HEADING_RE.match(line)
        if heading:
            flush_list()
            blocks.append(
                Heading(level=len(heading.group(1)), content=tuple(tokenize_inline(heading.group(2))))
            )
            continue

        item = _LIST_ITEM_RE.match(line)
        if item:
            leading, marker, rest = item.groups()
            ordered = marker[0].isdigit()
            if current_list is None or current_list.ordered != ordered:
                flush_list()
                current_list = _OpenList(ordered)
            current_list.items.append(
                ListItem(content=tuple(tokenize_inline(rest)), indent=len(leading) // INDENT_WIDTH)
            )
            continue

        quote = _BLOCKQUOTE_RE.match(line)
        if quote:
            flush_list()
            blocks.append(Blockquote(content=tuple(tokenize_inline(quote.group(1)))))
            continue

        flush_list()
        blocks.append(Paragraph(content=tuple(tokenize_inline(line))))

    if in_fence:
        # An unterminated fence runs to the end of the input.
        blocks.append(CodeBlock(content="\n".join(code_lines)))
    flush_list()
    return blocks
