"""Exception classes for Tallymark.

Every error raised by the numbering, rendering and rewrite stages derives
from TallymarkError. I/O failures are not wrapped; they surface as OSError.
"""

from __future__ import annotations

from collections.abc import Iterable


class TallymarkError(Exception):
    """Base exception for all Tallymark errors."""

    pass


class DeferredNotResolvedError(TallymarkError):
    """A page declared deferred footnotes that its body never references.

    Raised by FootnoteRegistry.validate_no_deferred_footnotes() once the body
    has been scanned. Publishing such a page would leave a "0" placeholder
    in the output forever.
    """

    def __init__(self, identifiers: Iterable[str]) -> None:
        """Initialize with the identifiers still awaiting a number.

        Args:
            identifiers: Unresolved footnote identifiers, in registration order
        """
        self.identifiers = tuple(identifiers)
        super().__init__(
            f"Deferred footnotes were never referenced in the body: {', '.join(self.identifiers)}"
        )


class MissingFootnoteError(TallymarkError):
    """Rendering met a reference marker whose identifier was never registered."""

    def __init__(self, identifier: str, source: str | None = None) -> None:
        """Initialize missing footnote error.

        Args:
            identifier: The footnote identifier that has no number
            source: Slug or path of the content being rendered (optional)
        """
        self.identifier = identifier
        self.source = source

        location = f" in '{source}'" if source else ""
        super().__init__(f"Footnote '{identifier}'{location} has not been registered")


class EntryNotFoundError(TallymarkError):
    """A requested content entry does not exist in its collection."""

    def __init__(self, slug: str, collection: str) -> None:
        self.slug = slug
        self.collection = collection
        super().__init__(f'Entry "{slug}" not found in collection "{collection}"')


class UnresolvedAnchorError(TallymarkError):
    """A deferred anchor has no normal anchor to take its number from.

    Only raised by the rewriter in strict mode; otherwise the anchor is
    left showing its placeholder and a warning is logged.
    """

    def __init__(self, path: str | None, identifiers: Iterable[str]) -> None:
        """Initialize unresolved anchor error.

        Args:
            path: Output unit being rewritten (None for in-memory strings)
            identifiers: Deferred identifiers without a resolved number
        """
        self.path = path
        self.identifiers = tuple(identifiers)

        location = f"{path}: " if path else ""
        super().__init__(
            f"{location}No resolved number for deferred footnotes: {', '.join(self.identifiers)}"
        )


class UnreadableOutputError(TallymarkError):
    """An output unit could not be decoded as text."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
