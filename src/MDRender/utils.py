from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

HTML_SUFFIX = ".html"


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str]) -> Path:
    if output:
        out_path = Path(output)
        if out_path.is_dir():
            out_path = out_path / f"{input_path.stem or 'Untitled'}{HTML_SUFFIX}"
        return out_path
    return input_path.with_suffix(HTML_SUFFIX)


def read_markdown(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_html(path: Path, html: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
