from __future__ import annotations


class CellRenderError(Exception):
    """Base class for errors raised by CellRender."""


class HtmlParseError(CellRenderError, ValueError):
    """Sanitized markup could not be built into an element tree."""


class ConfigError(CellRenderError, ValueError):
    """A style profile is not a mapping or holds unknown keys."""
