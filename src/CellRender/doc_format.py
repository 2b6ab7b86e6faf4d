from __future__ import annotations

from typing import Any, Mapping

from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor

from .config import StyleProfile


def _hex(color: str) -> str:
    return color.lstrip("#").upper()


def set_shading(properties, color: str) -> None:
    """Replace the ``w:shd`` fill of a run or paragraph property element."""
    for child in list(properties):
        if child.tag == qn("w:shd"):
            properties.remove(child)
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), _hex(color))
    properties.append(shd)


def set_run_font(run, attrs: Mapping[str, Any], profile: StyleProfile) -> None:
    """Apply one buffer segment's attributes to a python-docx run."""
    run.font.name = attrs.get("font", profile.body_font)
    run.font.size = Pt(attrs.get("size", profile.body_size_pt))
    run.bold = bool(attrs.get("bold"))
    run.italic = bool(attrs.get("italic"))
    run.underline = bool(attrs.get("underline"))
    run.font.strike = bool(attrs.get("strikethrough"))
    if attrs.get("background"):
        set_shading(run._r.get_or_add_rPr(), attrs["background"])
    if attrs.get("link_url"):
        run.font.color.rgb = RGBColor.from_string(_hex(profile.link_color))
        run.underline = True


def set_heading_font(run, level: int, attrs: Mapping[str, Any], profile: StyleProfile) -> None:
    """Lay the heading size and emphasis over a segment already styled by ``set_run_font``."""
    if attrs.get("background"):
        # Inline code keeps its own face and size.
        return
    run.font.size = Pt(profile.heading_size(level))
    run.bold = profile.heading_is_bold(level) or bool(attrs.get("bold"))
    run.italic = profile.heading_is_italic(level) or bool(attrs.get("italic"))


def apply_body_paragraph_format(paragraph) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(0)
    paragraph.paragraph_format.space_after = Pt(0)


def apply_heading_format(paragraph, profile: StyleProfile) -> None:
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    paragraph.paragraph_format.space_before = Pt(profile.heading_space_before_pt)


def apply_quote_format(paragraph, profile: StyleProfile) -> None:
    apply_body_paragraph_format(paragraph)
    paragraph.paragraph_format.left_indent = Pt(profile.blockquote_indent_pt)


def apply_code_block_format(paragraph, profile: StyleProfile) -> None:
    fmt = paragraph.paragraph_format
    paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
    fmt.left_indent = Pt(profile.code_block_indent_pt)
    fmt.right_indent = Pt(profile.code_block_indent_pt)
    fmt.space_before = Pt(profile.code_block_spacing_pt)
    fmt.space_after = Pt(profile.code_block_spacing_pt)
    set_shading(paragraph._p.get_or_add_pPr(), profile.code_background)
    for run in paragraph.runs:
        run.font.name = profile.code_font
        run.font.size = Pt(profile.code_size_pt)
