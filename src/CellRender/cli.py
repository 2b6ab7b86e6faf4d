from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import converter, renderer_docx
from .config import load_style_profile
from .utils import configure_logging, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cellrender",
        description="Convert Markdown, HTML or plain text notes into a DOCX file.",
    )
    parser.add_argument("input", type=str, help="Path to a UTF-8 text file")
    parser.add_argument("-o", "--output", type=str, help="Output DOCX file or directory")
    parser.add_argument("--style", type=str, help="YAML style profile")
    parser.add_argument("--strict", action="store_true", help="Fail on HTML that cannot be parsed")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    source = Path(args.input).expanduser()
    if not source.is_file():
        raise FileNotFoundError(f"Input file not found: {source}")
    target = resolve_output_path(source, args.output)
    profile = load_style_profile(args.style)
    if args.style:
        logging.info("Using style profile %s", args.style)

    text = source.read_text(encoding="utf-8")
    kind, blocks = converter.convert_with_kind(text, strict=args.strict)
    logging.info("%s: %s content, %d chars, %d block(s)", source.name, kind.value, len(text), len(blocks))

    renderer_docx.render_document(blocks, output_path=target, profile=profile)
    logging.info("Saved %s", target)


if __name__ == "__main__":
    main()
