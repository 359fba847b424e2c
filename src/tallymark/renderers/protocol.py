"""ContentRenderer protocol: interface for content renderers.

A renderer turns one content entry into an output fragment. It reads
footnote numbers from the page registry with ``get_number()`` and must never
call ``register()``: numbering is fixed before rendering starts.

Example:
    from tallymark.renderers.protocol import ContentRenderer

    def render_page(renderer: ContentRenderer, entries, registry) -> list[str]:
        return [renderer.render(entry, registry) for entry in entries]

"""

from typing import Protocol

from tallymark.content import ContentEntry
from tallymark.registry import FootnoteRegistry


class ContentRenderer(Protocol):
    """Protocol for content renderers.

    The built-in ``HtmlRenderer`` conforms to this protocol.

    """

    def render(self, entry: ContentEntry, registry: FootnoteRegistry) -> str:
        """Render an entry's body to a string.

        Args:
            entry: Content entry to render.
            registry: Page registry holding already-assigned numbers.

        Returns:
            Rendered output fragment.

        """
        ...
