"""Markdown rendering for user supplied text."""
from __future__ import annotations

from typing import Optional

import bleach
from markdown import markdown as render_markdown
from markupsafe import Markup

ALLOWED_TAGS = list(bleach.sanitizer.ALLOWED_TAGS) + [
    "p",
    "pre",
    "code",
    "ul",
    "ol",
    "li",
    "table",
    "thead",
    "tbody",
    "tr",
    "th",
    "td",
    "div",
    "span",
    "strong",
    "em",
    "blockquote",
    "br",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "hr",
]
ALLOWED_ATTRIBUTES = {
    **bleach.sanitizer.ALLOWED_ATTRIBUTES,
    "a": ["href", "title", "target", "rel"],
    "code": ["class"],
}


def render_markdown_html(text: Optional[str]) -> Markup:
    """Render Markdown into sanitized HTML."""
    if not text:
        return Markup("")
    html = render_markdown(
        text,
        extensions=["extra", "sane_lists"],
        output_format="html",
        tab_length=2,
    )
    sanitized_html = bleach.clean(html, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES)
    return Markup(sanitized_html)
