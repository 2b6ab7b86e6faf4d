from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Tuple

import yaml

from .errors import ConfigError


@dataclass(frozen=True)
class StyleProfile:
    """Fonts, sizes and spacing used when writing rich blocks into a document."""

    body_font: str = "Calibri"
    body_size_pt: float = 9.5
    code_font: str = "Courier New"
    code_size_pt: float = 8.5
    code_background: str = "#efefef"
    heading_sizes_pt: Tuple[float, ...] = (10.5, 10.0, 9.8, 9.5, 9.5, 9.5)
    heading_bold: Tuple[bool, ...] = (True, True, True, True, True, False)
    heading_italic: Tuple[bool, ...] = (False, False, False, False, True, True)
    heading_space_before_pt: float = 6
    blockquote_indent_pt: float = 36
    code_block_indent_pt: float = 18
    code_block_spacing_pt: float = 6
    link_color: str = "#1155cc"

    def heading_size(self, level: int) -> float:
        return self.heading_sizes_pt[_heading_index(level, self.heading_sizes_pt)]

    def heading_is_bold(self, level: int) -> bool:
        return self.heading_bold[_heading_index(level, self.heading_bold)]

    def heading_is_italic(self, level: int) -> bool:
        return self.heading_italic[_heading_index(level, self.heading_italic)]


def _heading_index(level: int, values: Tuple[Any, ...]) -> int:
    return min(max(level, 1), len(values)) - 1


def _check_scalar(key: str, value: Any, default: Any) -> None:
    if isinstance(default, bool):
        valid = isinstance(value, bool)
    elif isinstance(default, (int, float)):
        valid = isinstance(value, (int, float)) and not isinstance(value, bool)
    else:
        valid = isinstance(value, type(default))
    if not valid:
        raise ConfigError(f"{key} expects {type(default).__name__} values, got {value!r}.")


def _checked_value(key: str, value: Any, default: Any) -> Any:
    if isinstance(default, tuple):
        if not isinstance(value, list) or not value:
            raise ConfigError(f"{key} must be a non-empty list.")
        for item in value:
            _check_scalar(key, item, default[0])
        return tuple(value)
    _check_scalar(key, value, default)
    return value


def parse_style_profile(text: str) -> StyleProfile:
    """Build a profile from YAML text; keys not given keep their defaults."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ConfigError("Style profile root must be a mapping.")
    known = {f.name for f in fields(StyleProfile)}
    unknown = sorted(str(key) for key in set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown style profile keys: {', '.join(unknown)}")
    defaults = StyleProfile()
    overrides = {key: _checked_value(key, value, getattr(defaults, key)) for key, value in data.items()}
    return replace(defaults, **overrides)


def load_style_profile(path: str | Path | None) -> StyleProfile:
    if path is None:
        return StyleProfile()
    return parse_style_profile(Path(path).read_text(encoding="utf-8"))
