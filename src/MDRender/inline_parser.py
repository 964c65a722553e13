from __future__ import annotations

from typing import List

from .model import Inline, Span

MAX_NESTING = 32

_EMPHASIS_MARKERS = ("*", "_")


def parse_inline(text: str) -> Inline:
    """Resolve code spans, emphasis and links of a single line into spans."""
    return tuple(_scan(text, bold=False, italic=False, depth=0))


def _scan(text: str, bold: bool, italic: bool, depth: int) -> List[Span]:
    spans: List[Span] = []
    literal: list[str] = []

    def flush() -> None:
        if literal:
            spans.append(Span("".join(literal), bold=bold, italic=italic))
            literal.clear()

    i = 0
    length = len(text)
    while i < length:
        char = text[i]

        if char == "`":
            end = text.find("`", i + 1)
            if end > i + 1:
                flush()
                spans.append(Span(text[i + 1 : end], bold=bold, italic=italic, code=True))
                i = end + 1
                continue

        if char in _EMPHASIS_MARKERS and depth < MAX_NESTING and i + 1 < length:
            if text[i + 1] == char:
                start = i + 2
                end = _find_closing(text, start, char * 2)
                if end is not None:
                    flush()
                    spans.extend(_scan(text[start:end], bold=True, italic=italic, depth=depth + 1))
                    i = end + 2
                    continue
            else:
                start = i + 1
                end = _find_closing(text, start, char)
                if end is not None:
                    flush()
                    spans.extend(_scan(text[start:end], bold=bold, italic=True, depth=depth + 1))
                    i = end + 1
                    continue

        if char == "[":
            link = _match_link(text, i)
            if link is not None:
                label, url, i = link
                flush()
                spans.append(Span(label, bold=bold, italic=italic, link=url))
                continue

        literal.append(char)
        i += 1

    flush()
    return spans


def _find_closing(text: str, start: int, marker: str) -> int | None:
    # The closing marker has to leave at least one character of content.
    search = start
    while search < len(text):
        found = text.find(marker, search)
        if found == -1:
            return None
        if found > start:
            return found
        search = found + 1
    return None


def _match_link(text: str, index: int) -> tuple[str, str, int] | None:
    close_bracket = text.find("]", index + 1)
    if close_bracket == -1 or close_bracket == index + 1:
        return None
    if close_bracket + 1 >= len(text) or text[close_bracket + 1] != "(":
        return None
    close_paren = text.find(")", close_bracket + 2)
    if close_paren == -1:
        return None
    label = text[index + 1 : close_bracket]
    url = text[close_bracket + 2 : close_paren]
    return label, url, close_paren + 1
