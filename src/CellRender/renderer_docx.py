from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from docx import Document as DocxDocument
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from . import doc_format
from .config import StyleProfile
from .converter import convert_with_kind
from .model import (
    ContentKind,
    RichBlock,
    RichCodeBlock,
    RichHeading,
    RichListItem,
    RichParagraph,
    RichQuoteLine,
    StyledRun,
)
from .style_ranges import Attributes, StyledBuffer, write_runs
from .utils import extract_link_data, is_hyperlink

logger = logging.getLogger(__name__)

HEADING_STYLE = "Heading {level}"
LIST_STYLES = {False: "List Bullet", True: "List Number"}


def render_document(
    blocks: Iterable[RichBlock], output_path: str | Path, profile: Optional[StyleProfile] = None
) -> None:
    output_path = Path(output_path)
    docx = DocxDocument()
    write_blocks(docx, blocks, profile)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    docx.save(output_path)


def write_blocks(container, blocks: Iterable[RichBlock], profile: Optional[StyleProfile] = None) -> None:
    """Append rich blocks to a python-docx ``Document`` or table cell."""
    profile = profile or StyleProfile()
    for block in blocks:
        _dispatch_block(container, block, profile)


def insert_content(cell, text: str, profile: Optional[StyleProfile] = None, strict: bool = False) -> ContentKind:
    """Replace a table cell's content with ``text`` rendered as rich blocks."""
    kind, blocks = convert_with_kind(text, strict=strict)
    logger.debug("Writing %d %s block(s) into cell", len(blocks), kind.value)
    _clear_cell(cell)
    write_blocks(cell, blocks, profile)
    _remove_leading_empty_paragraph(cell)
    return kind


def insert_link(cell, text: str, url: str, profile: Optional[StyleProfile] = None) -> None:
    """Write ``text`` into the cell as one hyperlink to ``url``."""
    profile = profile or StyleProfile()
    _clear_cell(cell)
    paragraph = cell.add_paragraph()
    doc_format.apply_body_paragraph_format(paragraph)
    buffer = StyledBuffer()
    write_runs(buffer, [StyledRun(text or url, link_url=url)], profile)
    _write_buffer(paragraph, buffer, profile)
    _remove_leading_empty_paragraph(cell)


def fill_description_cell(
    cell, description: str, link: str = "", profile: Optional[StyleProfile] = None
) -> None:
    """Fill a report row's description cell.

    A URL in ``link`` turns the whole description into one hyperlink; without
    one the description is converted like any other cell content.
    """
    if link and is_hyperlink(link):
        label, url = extract_link_data(link)
        insert_link(cell, description or label, url, profile)
    else:
        insert_content(cell, description or "", profile)


def _dispatch_block(container, block: RichBlock, profile: StyleProfile) -> None:
    if isinstance(block, RichHeading):
        _render_heading(container, block, profile)
    elif isinstance(block, RichListItem):
        _render_list_item(container, block, profile)
    elif isinstance(block, RichQuoteLine):
        _render_quote_line(container, block, profile)
    elif isinstance(block, RichParagraph):
        _render_paragraph(container, block, profile)
    elif isinstance(block, RichCodeBlock):
        _render_code_block(container, block, profile)


def _render_heading(container, heading: RichHeading, profile: StyleProfile) -> None:
    level = min(max(heading.level, 1), 6)
    style = HEADING_STYLE.format(level=level)
    paragraph = container.add_paragraph(style=style if _style_exists(container, style) else None)
    buffer = StyledBuffer()
    write_runs(buffer, heading.runs, profile)
    for run, attrs in _write_buffer(paragraph, buffer, profile):
        doc_format.set_heading_font(run, level, attrs, profile)
    doc_format.apply_heading_format(paragraph, profile)


def _render_paragraph(container, block: RichParagraph, profile: StyleProfile) -> None:
    paragraph = container.add_paragraph()
    doc_format.apply_body_paragraph_format(paragraph)
    buffer = StyledBuffer()
    write_runs(buffer, block.runs, profile)
    _write_buffer(paragraph, buffer, profile)


def _render_list_item(container, item: RichListItem, profile: StyleProfile) -> None:
    style = LIST_STYLES[item.ordered]
    paragraph = container.add_paragraph(style=style if _style_exists(container, style) else None)
    doc_format.apply_body_paragraph_format(paragraph)
    buffer = StyledBuffer()
    if item.indent > 0:
        buffer.insert_text(0, "\t" * item.indent)
        buffer.set_attributes(0, item.indent, font=profile.body_font, size=profile.body_size_pt)
    write_runs(buffer, item.runs, profile, start=item.indent)
    _write_buffer(paragraph, buffer, profile)


def _render_quote_line(container, block: RichQuoteLine, profile: StyleProfile) -> None:
    paragraph = container.add_paragraph()
    doc_format.apply_quote_format(paragraph, profile)
    buffer = StyledBuffer()
    write_runs(buffer, block.runs, profile)
    _write_buffer(paragraph, buffer, profile)


def _render_code_block(container, block: RichCodeBlock, profile: StyleProfile) -> None:
    paragraph = container.add_paragraph()
    paragraph.add_run(block.text)
    doc_format.apply_code_block_format(paragraph, profile)


def _write_buffer(paragraph, buffer: StyledBuffer, profile: StyleProfile) -> List[Tuple[Any, Attributes]]:
    written = []
    for text, attrs in buffer.segments():
        run = paragraph.add_run(text)
        doc_format.set_run_font(run, attrs, profile)
        link_url = attrs.get("link_url")
        if link_url:
            _wrap_in_hyperlink(paragraph, run, link_url)
        written.append((run, attrs))
    return written


def _wrap_in_hyperlink(paragraph, run, url: str) -> None:
    rel_id = paragraph.part.relate_to(url, RELATIONSHIP_TYPE.HYPERLINK, is_external=True)
    hyperlink = OxmlElement("w:hyperlink")
    hyperlink.set(qn("r:id"), rel_id)
    run._r.addprevious(hyperlink)
    hyperlink.append(run._r)


def _style_exists(container, name: str) -> bool:
    try:
        container.part.styles[name]
    except KeyError:
        return False
    return True


def _clear_cell(cell) -> None:
    tc = cell._tc
    for child in list(tc):
        if child.tag != qn("w:tcPr"):
            tc.remove(child)


def _remove_leading_empty_paragraph(cell) -> None:
    paragraphs = cell.paragraphs
    if not paragraphs:
        cell.add_paragraph()
        return
    first = paragraphs[0]
    if len(paragraphs) > 1 and not first.text.strip():
        first._p.getparent().remove(first._p)
