from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import StyleProfile
from .model import StyledRun, StyleRange

Attributes = Dict[str, Any]


@dataclass
class RangeBuilder:
    """Assigns each run its ``[start, end)`` offsets from a running cursor."""

    cursor: int = 0
    ranges: List[StyleRange] = field(default_factory=list)
    code_ranges: List[StyleRange] = field(default_factory=list)

    def add(self, run: StyledRun) -> StyleRange:
        start = self.cursor
        self.cursor += len(run.text)
        style_range = StyleRange(
            start=start,
            end=self.cursor,
            bold=run.bold,
            italic=run.italic,
            underline=run.underline,
            strikethrough=run.strikethrough,
            code=run.is_code,
            link_url=run.link_url,
        )
        self.ranges.append(style_range)
        if run.is_code and style_range.length:
            self.code_ranges.append(style_range)
        return style_range


def build_ranges(runs: Iterable[StyledRun], start: int = 0) -> RangeBuilder:
    builder = RangeBuilder(cursor=start)
    for run in runs:
        builder.add(run)
    return builder


class StyledBuffer:
    """Text with per-character attributes.

    Behaves like an editable rich-text element: inserted characters pick up
    the attributes of the character just before the insertion point, and
    attributes are set over half-open offset ranges. Setting an attribute to
    ``None`` removes it.
    """

    def __init__(self, text: str = "", **attrs: Any) -> None:
        self._chars: List[str] = list(text)
        self._attrs: List[Attributes] = [dict(attrs) for _ in text]

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def insert_text(self, offset: int, text: str) -> None:
        if not 0 <= offset <= len(self._chars):
            raise IndexError(f"Offset {offset} outside buffer of length {len(self._chars)}")
        inherited = dict(self._attrs[offset - 1]) if offset > 0 else {}
        self._chars[offset:offset] = list(text)
        self._attrs[offset:offset] = [dict(inherited) for _ in text]

    def set_attributes(self, start: int, end: int, **attrs: Any) -> None:
        start = max(start, 0)
        end = min(end, len(self._chars))
        for index in range(start, end):
            current = self._attrs[index]
            for key, value in attrs.items():
                if value is None:
                    current.pop(key, None)
                else:
                    current[key] = value

    def attributes_at(self, offset: int) -> Attributes:
        return dict(self._attrs[offset])

    def segments(self) -> List[Tuple[str, Attributes]]:
        """Maximal stretches of text sharing identical attributes."""
        result: List[Tuple[str, Attributes]] = []
        for char, attrs in zip(self._chars, self._attrs):
            if result and result[-1][1] == attrs:
                result[-1] = (result[-1][0] + char, result[-1][1])
            else:
                result.append((char, dict(attrs)))
        return result


def write_runs(
    buffer: StyledBuffer,
    runs: Iterable[StyledRun],
    profile: Optional[StyleProfile] = None,
    start: int = 0,
) -> RangeBuilder:
    """Insert ``runs`` into ``buffer`` from ``start`` and style them by offset.

    Returns the builder holding the recorded ranges. Backgrounds are
    normalized last so only code ranges keep one.
    """
    profile = profile or StyleProfile()
    builder = RangeBuilder(cursor=start)
    for run in runs:
        style_range = builder.add(run)
        buffer.insert_text(style_range.start, run.text)
        if not style_range.length:
            continue
        _apply_range(buffer, style_range, profile)
    normalize_code_backgrounds(buffer, builder.code_ranges, profile.code_background)
    return builder


def _apply_range(buffer: StyledBuffer, style_range: StyleRange, profile: StyleProfile) -> None:
    start, end = style_range.start, style_range.end
    if style_range.code:
        buffer.set_attributes(
            start,
            end,
            font=profile.code_font,
            size=profile.code_size_pt,
            background=profile.code_background,
            bold=None,
            italic=None,
            underline=None,
            strikethrough=None,
            link_url=None,
        )
        return
    buffer.set_attributes(
        start,
        end,
        font=profile.body_font,
        size=profile.body_size_pt,
        bold=True if style_range.bold else None,
        italic=True if style_range.italic else None,
        underline=True if style_range.underline else None,
        strikethrough=True if style_range.strikethrough else None,
        link_url=style_range.link_url,
    )


def normalize_code_backgrounds(
    buffer: StyledBuffer, code_ranges: Iterable[StyleRange], color: str
) -> None:
    if not len(buffer):
        return
    buffer.set_attributes(0, len(buffer), background=None)
    for style_range in code_ranges:
        buffer.set_attributes(style_range.start, style_range.end, background=color)
