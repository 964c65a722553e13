from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from markdown_it.common.utils import escapeHtml

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

logger = logging.getLogger(__name__)

CHECKBOX_EMPTY = "☐ "
CHECKBOX_CHECKED = "☑ "

HTML_HEAD = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;
            line-height: 1.6;
            max-width: 800px;
            margin: 0 auto;
            padding: 20px;
            color: #333;
        }
        @media (prefers-color-scheme: dark) {
            body { background-color: #1a1a1a; color: #e0e0e0; }
            a { color: #6db3f2; }
            code { background-color: #2d2d2d; }
            pre { background-color: #2d2d2d; }
            blockquote { border-left-color: #555; color: #aaa; }
            h1, h2 { border-bottom-color: #333; }
            hr { border-top-color: #444; }
        }
        h1, h2, h3, h4, h5, h6 { margin-top: 1.5em; margin-bottom: 0.5em; }
        h1 { font-size: 2em; border-bottom: 1px solid #eee; padding-bottom: 0.3em; }
        h2 { font-size: 1.5em; border-bottom: 1px solid #eee; padding-bottom: 0.3em; }
        code {
            font-family: 'SF Mono', Menlo, Monaco, Consolas, monospace;
            background-color: #f6f8fa;
            padding: 0.2em 0.4em;
            border-radius: 3px;
            font-size: 0.9em;
        }
        pre {
            background-color: #f6f8fa;
            padding: 16px;
            border-radius: 6px;
            overflow-x: auto;
        }
        pre code { background: none; padding: 0; }
        blockquote {
            margin: 0;
            padding-left: 1em;
            border-left: 4px solid #ddd;
            color: #666;
        }
        ul, ol { padding-left: 2em; }
        li { margin: 0.25em 0; }
        a { color: #0366d6; text-decoration: none; }
        a:hover { text-decoration: underline; }
        hr { border: 0; border-top: 1px solid #ddd; }
    </style>
</head>
<body>
"""

HTML_TAIL = """
</body>
</html>
"""


@dataclass
class RenderState:
    out: List[str] = field(default_factory=list)
    paragraph: List[str] = field(default_factory=list)
    open_container: str | None = None


def render_html(source: str) -> str:
    return render_document(parse_markdown(source))


def render_document(doc: Document) -> str:
    """Render a document into a standalone HTML page with the fixed stylesheet."""
    state = RenderState()
    for block in doc.blocks:
        _dispatch_block(block, state)
    _flush_paragraph(state)
    _close_container(state)
    logger.debug("Rendered %d blocks into %d HTML lines", len(doc.blocks), len(state.out))
    return HTML_HEAD + "\n".join(state.out) + HTML_TAIL


def _dispatch_block(block: Block, state: RenderState) -> None:
    if isinstance(block, Paragraph):
        _close_container(state)
        state.paragraph.append(render_inline(block.inline).strip())
        return

    _flush_paragraph(state)
    if isinstance(block, Heading):
        _close_container(state)
        state.out.append(f"<h{block.level}>{render_inline(block.inline)}</h{block.level}>")
    elif isinstance(block, BulletListItem):
        _open_container(state, "ul")
        state.out.append(f"<li>{render_inline(block.inline)}</li>")
    elif isinstance(block, CheckListItem):
        _open_container(state, "ul")
        box = CHECKBOX_CHECKED if block.checked else CHECKBOX_EMPTY
        state.out.append(f"<li>{box}{render_inline(block.inline)}</li>")
    elif isinstance(block, OrderedListItem):
        _open_container(state, "ol", start=block.ordinal)
        state.out.append(f"<li>{render_inline(block.inline)}</li>")
    elif isinstance(block, Blockquote):
        _open_container(state, "blockquote")
        state.out.append(f"<p>{render_inline(block.inline)}</p>")
    elif isinstance(block, CodeBlock):
        _close_container(state)
        class_attr = f' class="language-{escapeHtml(block.language)}"' if block.language else ""
        state.out.append(f"<pre><code{class_attr}>{_escape(block.code)}</code></pre>")
    elif isinstance(block, HorizontalRule):
        _close_container(state)
        state.out.append("<hr>")
    elif isinstance(block, Blank):
        _close_container(state)
    else:
        raise TypeError(f"Unsupported block type: {type(block).__name__}")


def render_inline(spans: Iterable[Span]) -> str:
    return "".join(_render_span(span) for span in spans)


def _render_span(span: Span) -> str:
    content = _escape(span.text)
    if span.code:
        content = f"<code>{content}</code>"
    elif span.link is not None:
        content = f'<a href="{escapeHtml(span.link)}">{content}</a>'
    if span.italic:
        content = f"<em>{content}</em>"
    if span.bold:
        content = f"<strong>{content}</strong>"
    return content


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _open_container(state: RenderState, tag: str, start: str = "1") -> None:
    if state.open_container == tag:
        return
    _close_container(state)
    # Ordinals may be longer than int() accepts.
    start = start.lstrip("0") or "0"
    state.out.append(f'<{tag} start="{start}">' if start != "1" else f"<{tag}>")
    state.open_container = tag


def _close_container(state: RenderState) -> None:
    if state.open_container is not None:
        state.out.append(f"</{state.open_container}>")
        state.open_container = None


def _flush_paragraph(state: RenderState) -> None:
    if not state.paragraph:
        return
    content = " ".join(part for part in state.paragraph if part)
    if content:
        state.out.append(f"<p>{content}</p>")
    state.paragraph.clear()
