from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence

from markdown_it import MarkdownIt

from .markdown_parser import parse_markdown
from .model import (
    Blank,
    Block,
    Blockquote,
    BulletListItem,
    CheckListItem,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    OrderedListItem,
    Paragraph,
    Span,
)
from .options import DEFAULT_OPTIONS, RenderOptions

logger = logging.getLogger(__name__)

BULLET = "• "
CHECKBOX_EMPTY = "☐ "
CHECKBOX_CHECKED = "☑ "
QUOTE_BAR = "│ "
RULE = "─" * 27
LINE_BREAK = "\n"

# Only used for link validation and normalization, never for parsing.
_LINKS = MarkdownIt("commonmark")


@dataclass(frozen=True)
class StyledRun:
    text: str
    bold: bool = False
    italic: bool = False
    monospace: bool = False
    background: str | None = None
    foreground: str | None = None
    underline: bool = False
    link_target: str | None = None
    font_size: float | None = None


def render_styled_text(source: str, options: RenderOptions | None = None) -> List[StyledRun]:
    return render_document(parse_markdown(source), options)


def render_document(doc: Document, options: RenderOptions | None = None) -> List[StyledRun]:
    """Flatten a document into display runs, one segment per block joined by line breaks."""
    options = options or DEFAULT_OPTIONS
    runs: List[StyledRun] = []
    for index, block in enumerate(doc.blocks):
        if index:
            runs.append(StyledRun(LINE_BREAK, font_size=options.base_font_size))
        runs.extend(_dispatch_block(block, options))
    logger.debug("Rendered %d blocks into %d styled runs", len(doc.blocks), len(runs))
    return runs


def plain_text(runs: Iterable[StyledRun]) -> str:
    return "".join(run.text for run in runs)


def link_target(url: str) -> str | None:
    """Return the navigable form of ``url``, or None when it is not a usable URI."""
    if not url or any(char.isspace() or ord(char) < 0x20 or ord(char) == 0x7F for char in url):
        return None
    normalized = _LINKS.normalizeLink(url)
    if not _LINKS.validateLink(normalized):
        return None
    return normalized


def _dispatch_block(block: Block, options: RenderOptions) -> List[StyledRun]:
    size = options.base_font_size
    if isinstance(block, Heading):
        style = options.heading_style(block.level)
        return _render_inline(block.inline, options, size=style.size, bold=style.bold)
    if isinstance(block, Paragraph):
        return _render_inline(block.inline, options, size=size)
    if isinstance(block, BulletListItem):
        return [StyledRun(BULLET, font_size=size), *_render_inline(block.inline, options, size=size)]
    if isinstance(block, OrderedListItem):
        return [StyledRun(f"{block.ordinal}. ", font_size=size), *_render_inline(block.inline, options, size=size)]
    if isinstance(block, CheckListItem):
        box = CHECKBOX_CHECKED if block.checked else CHECKBOX_EMPTY
        return [StyledRun(box, font_size=size), *_render_inline(block.inline, options, size=size)]
    if isinstance(block, Blockquote):
        bar = StyledRun(QUOTE_BAR, foreground=options.quote_color, font_size=size)
        content = _render_inline(block.inline, options, size=size)
        return [bar, *(_tint(run, options.quote_color) for run in content)]
    if isinstance(block, CodeBlock):
        return [
            StyledRun(
                block.code + LINE_BREAK,
                monospace=True,
                background=options.code_background,
                font_size=options.resolved_code_font_size,
            )
        ]
    if isinstance(block, HorizontalRule):
        return [StyledRun(RULE, foreground=options.rule_color, font_size=size)]
    if isinstance(block, Blank):
        return []
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def _render_inline(
    spans: Sequence[Span], options: RenderOptions, size: float, bold: bool = False
) -> List[StyledRun]:
    runs: List[StyledRun] = []
    for span in spans:
        if span.code:
            runs.append(
                StyledRun(
                    span.text,
                    bold=bold or span.bold,
                    italic=span.italic,
                    monospace=True,
                    background=options.code_background,
                    font_size=options.resolved_code_font_size,
                )
            )
        elif span.link is not None:
            runs.append(
                StyledRun(
                    span.text,
                    bold=bold or span.bold,
                    italic=span.italic,
                    foreground=options.link_color,
                    underline=True,
                    link_target=link_target(span.link),
                    font_size=size,
                )
            )
        else:
            runs.append(StyledRun(span.text, bold=bold or span.bold, italic=span.italic, font_size=size))
    return runs


def _tint(run: StyledRun, color: str) -> StyledRun:
    # Links keep their own color inside quotes.
    if run.underline:
        return run
    return replace(run, foreground=color)
