"""Renderers turning content bodies into output markup."""

from tallymark.renderers.html import HtmlRenderer, render_footnote_ref
from tallymark.renderers.protocol import ContentRenderer

__all__ = [
    "ContentRenderer",
    "HtmlRenderer",
    "render_footnote_ref",
]
