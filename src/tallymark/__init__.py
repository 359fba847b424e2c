"""
Tallymark: sequential footnote numbering for static sites.

Assigns stable, reading-order numbers to footnote references, including
footnotes that a page header mentions before the body text that fixes their
position.

Quick Start:
    >>> from tallymark import ContentEntry, DeferredFootnote, FootnoteManager
    >>> page = FootnoteManager.create_for_page(
    ...     content=[ContentEntry(slug="a", body='x<FootnoteRef id="n1" />')],
    ...     deferred_footnotes=[DeferredFootnote(id="n1")],
    ... )
    >>> page.rendered_content[0].html
    'x<sup><a href="#fn-n1" class="footnote-ref" data-footnote-id="n1" data-deferred="false">1</a></sup>'

After the site is generated, resolve placeholder anchors:
    >>> from tallymark import process_html_files
    >>> report = process_html_files("dist")

Installation:
    pip install tallymark
"""

from tallymark.config import (
    FootnoteConfig,
    config_context,
    get_config,
    reset_config,
    set_config,
)
from tallymark.content import (
    ArticlePage,
    ContentCollection,
    ContentEntry,
    ContentStore,
    DeferredFootnote,
    load_collection,
)
from tallymark.errors import (
    DeferredNotResolvedError,
    EntryNotFoundError,
    MissingFootnoteError,
    TallymarkError,
    UnreadableOutputError,
    UnresolvedAnchorError,
)
from tallymark.extractor import FootnoteMarker, extract_footnote_refs, iter_footnote_refs
from tallymark.integration import DeferredFootnotesIntegration
from tallymark.manager import FootnoteManager, PageFootnotes, RenderedContent
from tallymark.registry import FootnoteEntry, FootnoteRegistry, FootnoteState
from tallymark.renderers import ContentRenderer, HtmlRenderer, render_footnote_ref
from tallymark.rewriter import (
    RewriteReport,
    RewriteResult,
    find_html_files,
    process_html_file,
    process_html_files,
    process_html_string,
)

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Numbering
    "FootnoteEntry",
    "FootnoteRegistry",
    "FootnoteState",
    # Extraction
    "FootnoteMarker",
    "extract_footnote_refs",
    "iter_footnote_refs",
    # Page orchestration
    "FootnoteManager",
    "PageFootnotes",
    "RenderedContent",
    # Content
    "ArticlePage",
    "ContentCollection",
    "ContentEntry",
    "ContentStore",
    "DeferredFootnote",
    "load_collection",
    # Rendering
    "ContentRenderer",
    "HtmlRenderer",
    "render_footnote_ref",
    # Rewrite pass
    "RewriteReport",
    "RewriteResult",
    "find_html_files",
    "process_html_file",
    "process_html_files",
    "process_html_string",
    "DeferredFootnotesIntegration",
    # Configuration (ContextVar-based)
    "FootnoteConfig",
    "get_config",
    "set_config",
    "reset_config",
    "config_context",
    # Errors
    "TallymarkError",
    "DeferredNotResolvedError",
    "MissingFootnoteError",
    "EntryNotFoundError",
    "UnreadableOutputError",
    "UnresolvedAnchorError",
]
