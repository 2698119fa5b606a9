from markupsafe import Markup

from utils.rendering import render_markdown_html


def test_nested_lists_use_expected_hierarchy():
    description = "- parent\n  - child\n  - child 2"

    html = render_markdown_html(description)
    html_str = str(html)

    assert isinstance(html, Markup)
    assert "<li>parent<ul>" in html_str
    assert "<li>child</li>" in html_str
    assert "<li>child 2</li>" in html_str


def test_empty_text_returns_empty_markup():
    html = render_markdown_html(None)

    assert isinstance(html, Markup)
    assert str(html) == ""


def test_disallowed_tags_are_sanitized():
    html = render_markdown_html("<script>alert('x')</script>")

    assert "<script" not in str(html).lower()


def test_links_keep_their_target():
    html = str(render_markdown_html("[docs](https://example.com/docs)"))

    assert '<a href="https://example.com/docs">docs</a>' in html
