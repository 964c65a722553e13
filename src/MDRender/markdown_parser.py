from __future__ import annotations

import logging
import re
from typing import List

from .inline_parser import parse_inline
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
)

logger = logging.getLogger(__name__)

FENCE = "```"

_HEADING_RE = re.compile(r"^(#{1,6}) ")
_ORDERED_RE = re.compile(r"^(\d+)\. ")
_RULE_RE = re.compile(r"^(-{3,}|\*{3,}|_{3,})$")

_UNCHECKED_PREFIX = "- [ ] "
_CHECKED_PREFIXES = ("- [x] ", "- [X] ")
_BULLET_PREFIXES = ("- ", "* ")


def parse_markdown(text: str) -> Document:
    """Split Markdown source into one block per line, fenced code regions excepted."""
    lines = text.replace("\r\n", "\n").split("\n")
    blocks: List[Block] = []
    fence_language: str | None = None
    fence_lines: list[str] | None = None

    for line in lines:
        if fence_lines is not None:
            if line.strip() == FENCE:
                blocks.append(CodeBlock(language=fence_language, code="\n".join(fence_lines)))
                fence_lines = None
            else:
                fence_lines.append(line)
            continue
        if _is_fence_start(line):
            fence_language = line[len(FENCE) :].strip() or None
            fence_lines = []
            continue
        blocks.append(_classify_line(line))

    if fence_lines is not None:
        logger.debug("Unterminated code fence closed at end of input")
        blocks.append(CodeBlock(language=fence_language, code="\n".join(fence_lines)))

    logger.debug("Parsed %d blocks from %d lines", len(blocks), len(lines))
    return Document(blocks=tuple(blocks))


def _is_fence_start(line: str) -> bool:
    return line.startswith(FENCE) and not line.startswith(FENCE + "`")


def _classify_line(line: str) -> Block:
    heading = _HEADING_RE.match(line)
    if heading:
        return Heading(level=len(heading.group(1)), inline=parse_inline(line[heading.end() :]))
    if line.startswith(_UNCHECKED_PREFIX):
        return CheckListItem(checked=False, inline=parse_inline(line[len(_UNCHECKED_PREFIX) :]))
    if line.startswith(_CHECKED_PREFIXES):
        return CheckListItem(checked=True, inline=parse_inline(line[len(_CHECKED_PREFIXES[0]) :]))
    if line.startswith(_BULLET_PREFIXES):
        return BulletListItem(inline=parse_inline(line[2:]))
    ordered = _ORDERED_RE.match(line)
    if ordered:
        return OrderedListItem(ordinal=ordered.group(1), inline=parse_inline(line[ordered.end() :]))
    if line.startswith(">"):
        content = line[1:]
        if content.startswith(" "):
            content = content[1:]
        return Blockquote(inline=parse_inline(content))
    stripped = line.strip()
    if _RULE_RE.match(stripped):
        return HorizontalRule()
    if not stripped:
        return Blank()
    return Paragraph(inline=parse_inline(line))
