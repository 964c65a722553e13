from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

MIN_FONT_SIZE = 12
MAX_FONT_SIZE = 24


@dataclass(frozen=True)
class HeadingStyle:
    size: float
    bold: bool = True


DEFAULT_HEADING_STYLES: Mapping[int, HeadingStyle] = {
    1: HeadingStyle(28, bold=True),
    2: HeadingStyle(22, bold=True),
    3: HeadingStyle(18, bold=True),
    4: HeadingStyle(16, bold=True),
    5: HeadingStyle(15, bold=False),
    6: HeadingStyle(14, bold=False),
}


@dataclass(frozen=True)
class RenderOptions:
    """Preferences for the styled-text renderer. The HTML shell ignores them."""

    base_font_size: float = 16
    code_font_size: float | None = None
    heading_styles: Mapping[int, HeadingStyle] = field(default_factory=lambda: dict(DEFAULT_HEADING_STYLES))
    code_background: str = "#f6f8fa"
    quote_color: str = "#6a737d"
    link_color: str = "#0000ff"
    rule_color: str = "#8e8e93"

    @property
    def resolved_code_font_size(self) -> float:
        if self.code_font_size is not None:
            return self.code_font_size
        return self.base_font_size - 2

    def heading_style(self, level: int) -> HeadingStyle:
        return self.heading_styles.get(level) or DEFAULT_HEADING_STYLES[level]


DEFAULT_OPTIONS = RenderOptions()


def load_options(path: str | Path) -> RenderOptions:
    """Read render options from a YAML mapping; an empty file yields the defaults."""
    text = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    return options_from_mapping(data)


def options_from_mapping(data: Any) -> RenderOptions:
    if not isinstance(data, dict):
        raise ValueError("Options root must be a mapping of option names to values.")

    known = {f.name for f in fields(RenderOptions)}
    unknown = sorted(str(key) for key in data if key not in known)
    if unknown:
        raise ValueError(f"Unknown render options: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, value in data.items():
        if key == "heading_styles":
            values[key] = _parse_heading_styles(value)
        elif key in {"base_font_size", "code_font_size"}:
            values[key] = _parse_font_size(key, value)
        else:
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Option '{key}' must be a non-empty color string.")
            values[key] = value.strip()
    return replace(DEFAULT_OPTIONS, **values)


def _parse_font_size(key: str, value: Any) -> float | None:
    if value is None and key == "code_font_size":
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Option '{key}' must be a number.")
    if not MIN_FONT_SIZE <= value <= MAX_FONT_SIZE:
        raise ValueError(f"Option '{key}' must be between {MIN_FONT_SIZE} and {MAX_FONT_SIZE} pt, got {value}.")
    return value


def _parse_heading_styles(value: Any) -> dict[int, HeadingStyle]:
    if not isinstance(value, dict):
        raise ValueError("Option 'heading_styles' must map heading levels to styles.")
    styles = dict(DEFAULT_HEADING_STYLES)
    for raw_level, raw_style in value.items():
        try:
            level = int(raw_level)
        except (TypeError, ValueError):
            raise ValueError(f"Heading level must be an integer, got {raw_level!r}.") from None
        if not 1 <= level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {level}.")
        if isinstance(raw_style, dict):
            size = raw_style.get("size", styles[level].size)
            bold = raw_style.get("bold", styles[level].bold)
        else:
            size, bold = raw_style, styles[level].bold
        if isinstance(size, bool) or not isinstance(size, (int, float)) or size <= 0:
            raise ValueError(f"Heading {level} size must be a positive number.")
        styles[level] = HeadingStyle(size, bold=bool(bold))
    return styles
