from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Span:
    """Leaf of inline text with its style flags."""

    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False
    link: str | None = None


Inline = Tuple[Span, ...]


@dataclass(frozen=True)
class Heading:
    level: int
    inline: Inline


@dataclass(frozen=True)
class Paragraph:
    inline: Inline


@dataclass(frozen=True)
class BulletListItem:
    inline: Inline


@dataclass(frozen=True)
class OrderedListItem:
    ordinal: str
    inline: Inline


@dataclass(frozen=True)
class CheckListItem:
    checked: bool
    inline: Inline


@dataclass(frozen=True)
class Blockquote:
    inline: Inline


@dataclass(frozen=True)
class CodeBlock:
    language: str | None
    code: str


@dataclass(frozen=True)
class HorizontalRule:
    """Horizontal rule / thematic break."""


@dataclass(frozen=True)
class Blank:
    """Empty or whitespace-only source line."""


Block = Union[
    Heading,
    Paragraph,
    BulletListItem,
    OrderedListItem,
    CheckListItem,
    Blockquote,
    CodeBlock,
    HorizontalRule,
    Blank,
]


@dataclass(frozen=True)
class Document:
    blocks: Tuple[Block, ...]
