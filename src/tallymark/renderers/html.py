"""HTML renderer for footnote reference markers.

Replaces every reference marker in a body with anchor markup and leaves the
rest of the body untouched. Numbers come from the page registry, which the
FootnoteManager has already filled by pre-scanning every body of the page.

Anchor markup:

    <sup><a href="#fn-ID" class="footnote-ref" data-footnote-id="ID"
        data-deferred="false">3</a></sup>

Deferred anchors (header callouts) always render the placeholder; the
rewrite pass fills in their number once the whole site is built.

Thread Safety:
    HtmlRenderer holds no per-render state and can be shared.
"""

import html

from tallymark.config import get_config
from tallymark.content import ContentEntry
from tallymark.errors import MissingFootnoteError
from tallymark.extractor import iter_footnote_markers
from tallymark.registry import FootnoteRegistry


def html_escape(s: str) -> str:
    """Escape HTML special characters, leaving single quotes alone."""
    return html.escape(s, quote=False).replace('"', "&quot;")


def render_footnote_ref(identifier: str, number: int | None = None, *, deferred: bool = False) -> str:
    """Render one footnote anchor.

    Args:
        identifier: Footnote identifier
        number: Resolved number (ignored for deferred anchors)
        deferred: Render a placeholder anchor to be repaired after the build

    Returns:
        Anchor markup
    """
    config = get_config()
    text = config.placeholder if deferred or number is None else str(number)
    ident = html_escape(identifier)
    return (
        f'<sup><a href="{html_escape(config.href_prefix)}{ident}" '
        f'class="{html_escape(config.anchor_class)}" '
        f'data-footnote-id="{ident}" '
        f'data-deferred="{"true" if deferred else "false"}">{text}</a></sup>'
    )


class HtmlRenderer:
    """Render reference markers in content bodies to anchors.

    The marker tag comes from the active FootnoteConfig, the same one the
    manager scans with.
    """

    __slots__ = ()

    def render(self, entry: ContentEntry, registry: FootnoteRegistry) -> str:
        """Render ``entry.body`` with every marker replaced.

        Raises:
            MissingFootnoteError: A normal marker has no registered number.
        """
        return self.render_body(entry.body, registry, source=entry.slug)

    def render_body(self, body: str, registry: FootnoteRegistry, source: str | None = None) -> str:
        parts: list[str] = []
        pos = 0
        for marker in iter_footnote_markers(body):
            parts.append(body[pos : marker.start])
            if marker.deferred:
                parts.append(render_footnote_ref(marker.identifier, deferred=True))
            else:
                number = registry.get_number(marker.identifier)
                if number is None:
                    raise MissingFootnoteError(marker.identifier, source)
                parts.append(render_footnote_ref(marker.identifier, number))
            pos = marker.end
        parts.append(body[pos:])
        return "".join(parts)


__all__ = [
    "HtmlRenderer",
    "html_escape",
    "render_footnote_ref",
]
