from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional, Tuple, Union

_URL_RE = re.compile(r"https?://[^\s]+")

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr, tagged with the module that emitted them.

    INFO by default, DEBUG with ``verbose`` so the converter's classification
    and sanitized markup show up.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def resolve_output_path(input_path: Path, output: Optional[Union[str, Path]] = None) -> Path:
    """Where the ``.docx`` for ``input_path`` goes.

    No ``output`` means next to the input. An existing directory receives
    ``<stem>.docx``; anything else is taken as the file path itself.
    """
    if not output:
        return input_path.with_suffix(".docx")
    target = Path(output).expanduser()
    return target / f"{input_path.stem}.docx" if target.is_dir() else target


def is_hyperlink(text: str) -> bool:
    return _URL_RE.search(text) is not None


def extract_link_data(text: str) -> Tuple[str, str]:
    """Split ``text`` into its remaining label and the first URL in it."""
    match = _URL_RE.search(text)
    if not match:
        return text, ""
    url = match.group(0)
    label = text.replace(url, "", 1).strip()
    return label or url, url
