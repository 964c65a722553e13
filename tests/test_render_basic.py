import pytest

from MDRender.model import Blank, CodeBlock, Document, Heading, Paragraph, Span
from MDRender.options import RenderOptions
from MDRender.renderer_html import render_html
from MDRender.renderer_html import render_document as render_html_document
from MDRender.renderer_styled import (
    BULLET,
    QUOTE_BAR,
    RULE,
    StyledRun,
    link_target,
    plain_text,
    render_document,
    render_styled_text,
)

EDGE_INPUTS = ["", " ", "\n\n", "***", "[]()", "**", "`", "```", "> ", "- ", "1. ", "#", "# ", "[x](", "_*_*"]


def _body(page: str) -> str:
    return page.split("<body>", 1)[1].rsplit("</body>", 1)[0]


@pytest.mark.parametrize("source", EDGE_INPUTS)
def test_renderers_are_total(source):
    runs = render_styled_text(source)
    assert all(run.text for run in runs)
    page = render_html(source)
    assert page.startswith("<!DOCTYPE html>")
    assert page.rstrip().endswith("</html>")


def test_empty_input_yields_no_runs():
    assert render_styled_text("") == []


def test_code_span_is_single_monospace_run():
    (run,) = render_styled_text("`*not italic*`")
    assert run.text == "*not italic*"
    assert run.monospace
    assert not run.italic
    assert run.background == RenderOptions().code_background


def test_unmatched_emphasis_is_plain():
    (run,) = render_styled_text("*hello")
    assert run.text == "*hello"
    assert not run.italic and not run.bold


def test_bullets_get_one_decoration_each():
    runs = render_styled_text("- a\n- b\n- c")
    assert [run.text for run in runs].count(BULLET) == 3
    assert plain_text(runs) == "• a\n• b\n• c"


def test_block_decorations():
    runs = render_styled_text("3. third\n- [ ] open\n- [x] done\n> quote\n---")
    assert plain_text(runs) == "3. third\n☐ open\n☑ done\n│ quote\n" + RULE
    quote_runs = [run for run in runs if run.text in (QUOTE_BAR, "quote")]
    assert all(run.foreground == RenderOptions().quote_color for run in quote_runs)
    assert runs[-1].foreground == RenderOptions().rule_color


def test_heading_uses_heading_style():
    options = RenderOptions()
    (run,) = render_styled_text("## Features", options)
    assert run.font_size == options.heading_style(2).size
    assert run.bold
    (small,) = render_styled_text("###### Fine print", options)
    assert small.font_size == 14
    assert not small.bold


def test_bold_italic_flags():
    runs = render_styled_text("**b** *i* ***x***")
    assert runs[0] == StyledRun("b", bold=True, font_size=16)
    assert runs[2] == StyledRun("i", italic=True, font_size=16)


def test_code_block_runs():
    runs = render_styled_text("```\n# not a heading\n```\nafter")
    assert runs[0].text == "# not a heading\n"
    assert runs[0].monospace
    assert runs[0].font_size == RenderOptions().resolved_code_font_size
    assert plain_text(runs) == "# not a heading\n\nafter"


def test_blank_lines_are_line_breaks():
    runs = render_styled_text("a\n\nb")
    assert [run.text for run in runs] == ["a", "\n", "\n", "b"]


def test_links_in_styled_text():
    valid, _, invalid = render_styled_text("[Apple](https://apple.com) [x](not a url)")
    assert valid.text == "Apple"
    assert valid.link_target == "https://apple.com"
    assert valid.underline and valid.foreground == RenderOptions().link_color
    assert invalid.text == "x"
    assert invalid.link_target is None
    assert invalid.underline


def test_link_target_validation():
    assert link_target("https://example.com/a b") is None
    assert link_target("") is None
    assert link_target("javascript:alert(1)") is None
    assert link_target("https://example.com/ü") == "https://example.com/%C3%BC"
    assert link_target("notes/today.md") == "notes/today.md"


def test_custom_options_flow_through():
    options = RenderOptions(base_font_size=20, code_background="#000000")
    runs = render_styled_text("text `code`", options)
    assert runs[0].font_size == 20
    assert runs[1].font_size == 18
    assert runs[1].background == "#000000"


def test_render_document_accepts_model():
    doc = Document(blocks=(Heading(level=1, inline=(Span("Title"),)), Blank(), Paragraph(inline=(Span("x"),))))
    assert plain_text(render_document(doc)) == "Title\n\nx"


def test_html_escapes_source_text():
    page = render_html("<script>alert('x & y')</script>")
    body = _body(page)
    assert "<script>" not in page
    assert "&lt;script&gt;" in body
    assert "&amp;" in body
    assert "<p>&lt;script&gt;alert('x &amp; y')&lt;/script&gt;</p>" in body


def test_html_fence_is_verbatim_code():
    page = render_html("```python\n# not a heading\nx < 1\n```")
    assert '<pre><code class="language-python"># not a heading\nx &lt; 1</code></pre>' in page
    assert "<h1>" not in page


def test_html_code_block_without_language():
    assert "<pre><code>x</code></pre>" in render_html("```\nx\n```")


def test_html_list_grouping():
    body = _body(render_html("- a\n- b\n* c"))
    assert body.count("<ul>") == 1
    assert body.count("<li>") == 3
    assert "<ul>\n<li>a</li>\n<li>b</li>\n<li>c</li>\n</ul>" in body


def test_html_checklist_shares_bullet_list():
    body = _body(render_html("- item\n- [ ] open\n- [x] done"))
    assert body.count("<ul>") == 1
    assert "<li>☐ open</li>" in body
    assert "<li>☑ done</li>" in body


def test_html_ordered_lists():
    body = _body(render_html("1. one\n2. two\n\n3. three"))
    assert body.count("<ol>") == 1
    assert '<ol start="3">' in body
    assert body.count("</ol>") == 2


def test_html_paragraph_buffer_and_blank():
    body = _body(render_html("first line\n  second line\n\nthird"))
    assert "<p>first line second line</p>" in body
    assert "<p>third</p>" in body


def test_html_blocks():
    body = _body(render_html("# Title\n###### Six\n> a\n> b\n---"))
    assert "<h1>Title</h1>" in body
    assert "<h6>Six</h6>" in body
    assert "<blockquote>\n<p>a</p>\n<p>b</p>\n</blockquote>" in body
    assert "<hr>" in body


def test_html_inline_spans():
    body = _body(render_html("**b** *i* ***x*** `c<d` [l](https://e.com)"))
    assert "<strong>b</strong>" in body
    assert "<em>i</em>" in body
    assert "<code>c&lt;d</code>" in body
    assert '<a href="https://e.com">l</a>' in body


def test_html_link_href_is_verbatim():
    body = _body(render_html("[x](not a url)"))
    assert '<a href="not a url">x</a>' in body


def test_html_shell_supports_dark_mode():
    page = render_html_document(Document(blocks=(Blank(),)))
    assert "<style>" in page
    assert "@media (prefers-color-scheme: dark)" in page


def test_html_renders_code_block_model():
    page = render_html_document(Document(blocks=(CodeBlock(language="a\"b", code="&"),)))
    assert '<code class="language-a&quot;b">&amp;</code>' in page
