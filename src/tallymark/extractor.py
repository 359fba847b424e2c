"""Reference marker extraction from raw source bodies.

Bodies are scanned as text before they are rendered, so markers are found
with regular expressions rather than a markup parser: the source is not
necessarily well-formed HTML yet.

A reference marker looks like a JSX/HTML component:

    <FootnoteRef id="smith-2019" />
    <FootnoteRef class="x" id='note' deferred></FootnoteRef>

The tag name is fixed per configuration; ``id`` may use either quote
character; other attributes may appear before or after it.

Example:
    >>> extract_footnote_refs('See<FootnoteRef id="a"/> and <FootnoteRef id=\\'b\\'/>.')
    ['a', 'b']
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache

from tallymark.config import get_config

# name, then an optional value in "..", '..', {..} (JSX) or bare form
_ATTRIBUTE_RE = re.compile(
    r"""([^\s"'=<>/]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|\{([^}]*)\}|([^\s"'=<>`/]+)))?"""
)


@dataclass(frozen=True, slots=True)
class FootnoteMarker:
    """One reference marker found in a source body.

    Attributes:
        identifier: Value of the ``id`` attribute
        deferred: Whether the marker carries a truthy ``deferred`` attribute
        start: Offset of the first character of the marker
        end: Offset just past the marker (including a paired closing tag)

    """

    identifier: str
    deferred: bool
    start: int
    end: int


@lru_cache(maxsize=16)
def marker_pattern(tag: str) -> re.Pattern[str]:
    """Compile the marker pattern for a tag name.

    Matches self-closing tags, bare opening tags, and an opening tag
    followed directly by its closing tag.
    """
    name = re.escape(tag)
    return re.compile(
        rf"<{name}\b(?P<attrs>[^>]*?)(?:/>|>(?:\s*</{name}\s*>)?)"
    )


def _unquote_expression(value: str) -> str:
    """Strip a string literal inside a JSX expression: {"a"} -> a."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'`":
        return value[1:-1]
    return value


def parse_attributes(attrs: str) -> dict[str, str]:
    """Parse a tag's attribute text into a dict. Bare attributes map to ""."""
    result: dict[str, str] = {}
    for m in _ATTRIBUTE_RE.finditer(attrs):
        name = m.group(1)
        value = next((g for g in m.groups()[1:] if g is not None), "")
        if m.group(4) is not None:
            value = _unquote_expression(value)
        result.setdefault(name, value)
    return result


def iter_footnote_markers(body: str, tag: str | None = None) -> Iterator[FootnoteMarker]:
    """Yield every reference marker in ``body`` in textual order.

    Markers without an ``id`` attribute are skipped.
    """
    pattern = marker_pattern(tag or get_config().marker_tag)
    for m in pattern.finditer(body):
        attributes = parse_attributes(m.group("attrs"))
        identifier = attributes.get("id")
        if not identifier:
            continue
        deferred = attributes.get("deferred")
        yield FootnoteMarker(
            identifier=identifier,
            deferred=deferred is not None and deferred.strip().lower() in ("", "true"),
            start=m.start(),
            end=m.end(),
        )


def iter_footnote_refs(body: str, tag: str | None = None) -> Iterator[str]:
    """Yield the identifier of every reference marker in ``body``."""
    for marker in iter_footnote_markers(body, tag):
        yield marker.identifier


def extract_footnote_refs(body: str, tag: str | None = None) -> list[str]:
    """Return identifiers of all reference markers, duplicates included."""
    return list(iter_footnote_refs(body, tag))


__all__ = [
    "FootnoteMarker",
    "extract_footnote_refs",
    "iter_footnote_markers",
    "iter_footnote_refs",
    "marker_pattern",
    "parse_attributes",
]
