"""Per-page footnote orchestration.

Rendering a page in one pass would number footnotes in whatever order
components happen to execute. FootnoteManager instead fixes the numbering
before anything is rendered:

1. Deferred declarations (header callouts) are registered without a number.
2. Every body is scanned for reference markers, in page order, and each one
   is registered; this is where numbers are assigned.
3. The registry is checked for deferred footnotes that no body referenced.
4. Bodies are rendered; the renderer only looks numbers up.

Usage:
    >>> page = FootnoteManager.create_for_page(
    ...     content=[ContentEntry(slug="intro", body='Hi<FootnoteRef id="a"/>')],
    ...     deferred_footnotes=[DeferredFootnote(id="a")],
    ... )
    >>> page.registry.get_number("a")
    1

"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from tallymark.content import ContentEntry, DeferredFootnote
from tallymark.extractor import iter_footnote_markers
from tallymark.registry import FootnoteEntry, FootnoteRegistry
from tallymark.renderers.html import HtmlRenderer
from tallymark.renderers.protocol import ContentRenderer
from tallymark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RenderedContent:
    """A content entry with its rendered output."""

    entry: ContentEntry
    html: str


@dataclass(frozen=True, slots=True)
class PageFootnotes:
    """Result of preparing and rendering one page.

    Attributes:
        manager: The manager that rendered the page
        registry: The page's registry (numbers are final)
        rendered_content: Rendered entries, in input order
        deferred_mappings: Deferred identifiers and the numbers they resolved to

    """

    manager: FootnoteManager
    registry: FootnoteRegistry
    rendered_content: list[RenderedContent]
    deferred_mappings: list[FootnoteEntry]


class FootnoteManager:
    """Registers a page's footnotes in reading order, then renders it."""

    __slots__ = ("_registry", "_renderer")

    def __init__(self, renderer: ContentRenderer | None = None) -> None:
        self._registry = FootnoteRegistry()
        self._renderer: ContentRenderer = renderer or HtmlRenderer()

    @property
    def registry(self) -> FootnoteRegistry:
        return self._registry

    def register_deferred_footnotes(self, footnotes: Iterable[DeferredFootnote]) -> FootnoteManager:
        """Register footnotes declared before the body (e.g. in a page header).

        They are numbered by their first appearance in the body, not by
        declaration order.
        """
        for footnote in footnotes:
            self._registry.register(footnote.id, footnote.deferred)
        return self

    def pre_register_from_content(self, entries: Iterable[ContentEntry]) -> FootnoteManager:
        """Scan every body for reference markers and register them in order.

        Must run over all bodies before any is rendered. Every marker takes
        its number at its textual position, callouts included.
        """
        for entry in entries:
            for marker in iter_footnote_markers(entry.body):
                self._registry.register(marker.identifier, deferred=False)
        return self

    def render_content(self, entries: Iterable[ContentEntry]) -> list[RenderedContent]:
        """Render entries with the already-assigned numbers, preserving order."""
        return [
            RenderedContent(entry=entry, html=self._renderer.render(entry, self._registry))
            for entry in entries
        ]

    @classmethod
    def create_for_page(
        cls,
        content: Sequence[ContentEntry],
        deferred_footnotes: Iterable[DeferredFootnote] | None = None,
        renderer: ContentRenderer | None = None,
        validate: bool = True,
    ) -> PageFootnotes:
        """Number and render a whole page.

        Args:
            content: Page bodies in reading order
            deferred_footnotes: Footnotes declared ahead of the body
            renderer: Renderer to use (HtmlRenderer by default)
            validate: Fail when a deferred footnote never appears in the body

        Returns:
            PageFootnotes with the rendered content and final numbering

        Raises:
            DeferredNotResolvedError: A deferred footnote was never referenced.
            MissingFootnoteError: The renderer met an unregistered marker.
        """
        manager = cls(renderer)

        if deferred_footnotes:
            manager.register_deferred_footnotes(deferred_footnotes)

        manager.pre_register_from_content(content)

        if validate:
            manager.registry.validate_no_deferred_footnotes()

        rendered = manager.render_content(content)
        mappings = manager.registry.get_deferred_mappings()

        logger.info(
            "Rendered %d entries with %d footnotes (%d deferred)",
            len(rendered),
            len(manager.registry),
            len(mappings),
        )
        return PageFootnotes(
            manager=manager,
            registry=manager.registry,
            rendered_content=rendered,
            deferred_mappings=mappings,
        )


__all__ = [
    "FootnoteManager",
    "PageFootnotes",
    "RenderedContent",
]
