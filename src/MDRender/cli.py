from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import markdown_parser, renderer_html, renderer_styled
from .options import load_options
from .utils import configure_logging, read_markdown, resolve_output_path, write_html


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdrender",
        description="Render Markdown into a standalone HTML page or styled plain text.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file")
    parser.add_argument("-o", "--output", type=str, help="Output HTML path")
    parser.add_argument(
        "--format",
        choices=("html", "text"),
        default="html",
        help="Write an HTML export (default) or print the styled text to stdout",
    )
    parser.add_argument("--options", type=str, help="YAML file with styled-text render options")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    logging.info("Reading %s", input_path)
    markdown_text = read_markdown(input_path)
    logging.debug("Markdown length: %d chars", len(markdown_text))

    logging.info("Parsing markdown...")
    document = markdown_parser.parse_markdown(markdown_text)

    if args.format == "text":
        options = load_options(Path(args.options).expanduser()) if args.options else None
        runs = renderer_styled.render_document(document, options)
        sys.stdout.write(renderer_styled.plain_text(runs) + "\n")
        return

    if args.options:
        logging.warning("Ignoring %s: render options only apply to --format text", args.options)
    output_path = resolve_output_path(input_path, args.output)
    logging.info("Rendering HTML to %s", output_path)
    write_html(output_path, renderer_html.render_document(document))

    logging.info("Done. Saved to %s", output_path)


if __name__ == "__main__":
    main()
