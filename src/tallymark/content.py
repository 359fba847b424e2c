"""Content entries and collections.

A page is assembled from content entries (articles, animal profiles,
footnote bodies...) pulled out of named collections. Only ``body`` matters to
footnote numbering; the rest is ordering and lookup metadata.

Collections are loaded from directories of Markdown/MDX files with optional
YAML front matter:

    ---
    id: getting-started
    title: Getting Started
    order: 1
    ---
    Astro islands<FootnoteRef id="islands" /> ...

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml

from tallymark.errors import EntryNotFoundError, TallymarkError
from tallymark.utils.logger import get_logger

logger = get_logger(__name__)

CONTENT_SUFFIXES = (".md", ".mdx")

_FRONT_MATTER_DELIMITER = "---"


@dataclass(frozen=True, slots=True)
class ContentEntry:
    """A single piece of page content.

    Attributes:
        slug: Identifier within its collection
        body: Raw source text, reference markers included
        title: Display title (optional)
        order: Sort key for ordered collections (optional)
        collection: Name of the owning collection
        data: Remaining front matter fields

    """

    slug: str
    body: str
    title: str | None = None
    order: int | float | None = None
    collection: str = ""
    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DeferredFootnote:
    """A footnote declared ahead of the body, e.g. by a page header callout."""

    id: str
    deferred: bool = True


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into (front matter, body).

    Documents without a leading ``---`` line have empty front matter.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != _FRONT_MATTER_DELIMITER:
        return {}, text

    for index in range(1, len(lines)):
        if lines[index].strip() == _FRONT_MATTER_DELIMITER:
            raw = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            data = yaml.safe_load(raw) or {}
            if not isinstance(data, dict):
                raise TallymarkError(f"Front matter must be a mapping, got {type(data).__name__}")
            return data, body

    raise TallymarkError("Unterminated front matter block")


class ContentCollection:
    """An ordered, named set of content entries."""

    __slots__ = ("_entries", "name")

    def __init__(self, name: str, entries: Iterable[ContentEntry] = ()) -> None:
        self.name = name
        self._entries: dict[str, ContentEntry] = {}
        for entry in entries:
            self._entries[entry.slug] = entry

    def get_entry(self, slug: str) -> ContentEntry:
        """Look up one entry.

        Raises:
            EntryNotFoundError: No entry with this slug exists.
        """
        try:
            return self._entries[slug]
        except KeyError:
            raise EntryNotFoundError(slug, self.name) from None

    def get_ordered(self) -> list[ContentEntry]:
        """Entries sorted by ``order``; a missing order sorts as 0. Stable."""
        return sorted(self._entries.values(), key=lambda e: e.order or 0)

    def get_by_ids(self, ids: Sequence[str]) -> list[ContentEntry]:
        """Entries in exactly the given order."""
        return [self.get_entry(slug) for slug in ids]

    def __iter__(self) -> Iterator[ContentEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, slug: object) -> bool:
        return slug in self._entries


def load_entry(path: Path, collection: str = "") -> ContentEntry:
    """Read one content file into a ContentEntry."""
    try:
        data, body = split_front_matter(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise TallymarkError(f"{path}: invalid front matter ({e})") from e
    slug = str(data.pop("id", path.stem))
    title = data.pop("title", None)
    order = data.pop("order", None)
    if order is not None and (isinstance(order, bool) or not isinstance(order, (int, float))):
        raise TallymarkError(f"{path}: front matter 'order' must be a number, got {order!r}")
    return ContentEntry(
        slug=slug,
        body=body,
        title=title,
        order=order,
        collection=collection,
        data=data,
    )


def load_collection(directory: str | Path, name: str | None = None) -> ContentCollection:
    """Load every Markdown/MDX file directly inside ``directory``.

    Args:
        directory: Directory holding the collection's files
        name: Collection name (defaults to the directory name)

    Returns:
        ContentCollection with entries in file-name order
    """
    root = Path(directory)
    name = name or root.name
    paths = sorted(p for p in root.iterdir() if p.is_file() and p.suffix in CONTENT_SUFFIXES)
    collection = ContentCollection(name, (load_entry(p, name) for p in paths))
    logger.debug("Loaded %d entries into collection %r", len(collection), name)
    return collection


@dataclass(frozen=True, slots=True)
class ArticlePage:
    """Content for one article page, in page order."""

    articles: list[ContentEntry]
    additional_content: list[ContentEntry]

    @property
    def all_content(self) -> list[ContentEntry]:
        return [*self.articles, *self.additional_content]


class ContentStore:
    """Named collections available to page builders."""

    __slots__ = ("_collections",)

    def __init__(self, collections: Iterable[ContentCollection] = ()) -> None:
        self._collections = {c.name: c for c in collections}

    @classmethod
    def from_directory(cls, root: str | Path) -> ContentStore:
        """Treat each subdirectory of ``root`` as a collection."""
        base = Path(root)
        return cls(load_collection(d) for d in sorted(base.iterdir()) if d.is_dir())

    def add(self, collection: ContentCollection) -> None:
        self._collections[collection.name] = collection

    def collection(self, name: str) -> ContentCollection:
        try:
            return self._collections[name]
        except KeyError:
            raise TallymarkError(f"Unknown collection '{name}'") from None

    def get_entry(self, collection: str, slug: str) -> ContentEntry:
        return self.collection(collection).get_entry(slug)

    def create_article_page(
        self,
        article_order: Sequence[str] | Literal["by-order"] | None = None,
        additional_content: Sequence[tuple[str, str]] = (),
        articles_collection: str = "articles",
    ) -> ArticlePage:
        """Gather the entries making up an article page.

        Args:
            article_order: ``None`` or ``"by-order"`` sorts articles by their
                ``order`` field; a list of slugs picks them explicitly
            additional_content: (collection, slug) pairs appended after the
                articles, e.g. footnote bodies
            articles_collection: Name of the articles collection

        Raises:
            EntryNotFoundError: A requested slug does not exist.
        """
        articles = self.collection(articles_collection)
        if article_order is None or article_order == "by-order":
            selected = articles.get_ordered()
        else:
            selected = articles.get_by_ids(article_order)

        extra = [self.get_entry(name, slug) for name, slug in additional_content]
        return ArticlePage(articles=selected, additional_content=extra)


__all__ = [
    "ArticlePage",
    "ContentCollection",
    "ContentEntry",
    "ContentStore",
    "DeferredFootnote",
    "load_collection",
    "load_entry",
    "split_front_matter",
]
