"""Post-build resolution of deferred footnote anchors.

Deferred anchors are written before their number exists, so they ship with
the placeholder text. Once the whole site is generated, this pass parses each
output unit, reads the numbers carried by the page's normal anchors, and
copies them into the deferred anchors with the same identifier.

Output units are independent: identifiers never leak between files.

Example:
    >>> html = (
    ...     '<a data-footnote-id="x" data-deferred="true">0</a>'
    ...     '<a data-footnote-id="x" data-deferred="false">3</a>'
    ... )
    >>> process_html_string(html).html
    '<a data-footnote-id="x" data-deferred="true">3</a><a data-footnote-id="x" data-deferred="false">3</a>'

"""

from __future__ import annotations

import contextlib
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from tallymark.config import get_config
from tallymark.errors import UnreadableOutputError, UnresolvedAnchorError
from tallymark.utils.logger import get_logger

logger = get_logger(__name__)

FOOTNOTE_ID_ATTR = "data-footnote-id"
DEFERRED_ATTR = "data-deferred"


class _SourceOrderFormatter(HTMLFormatter):
    """Serialize attributes in source order and void elements as written."""

    def __init__(self) -> None:
        super().__init__(
            entity_substitution=EntitySubstitution.substitute_xml,
            void_element_close_prefix=None,
        )

    def attributes(self, tag):
        return list(tag.attrs.items())


_FORMATTER = _SourceOrderFormatter()


@dataclass(frozen=True, slots=True)
class RewriteResult:
    """Outcome of rewriting one output unit.

    Attributes:
        html: Rewritten markup (the input object itself when unchanged)
        changed: Whether any deferred anchor's text was replaced
        resolved: Identifiers whose deferred anchors were updated
        unresolved: Deferred identifiers with no matching normal anchor

    """

    html: str
    changed: bool = False
    resolved: tuple[str, ...] = ()
    unresolved: tuple[str, ...] = ()


@dataclass(slots=True)
class RewriteReport:
    """Totals for a rewrite pass over an output directory."""

    scanned: int = 0
    updated: list[Path] = field(default_factory=list)
    unresolved: dict[Path, tuple[str, ...]] = field(default_factory=dict)


def process_html_string(html: str, *, source: str | None = None, strict: bool | None = None) -> RewriteResult:
    """Resolve deferred anchors in one document.

    Args:
        html: Finished output markup
        source: Path of the unit, used in log and error messages
        strict: Raise on unmatched deferred anchors (defaults to config)

    Returns:
        RewriteResult; ``html`` is the original string when nothing changed.

    Raises:
        UnresolvedAnchorError: In strict mode, a deferred anchor has no
            normal anchor to take its number from.
    """
    soup = BeautifulSoup(html, "html.parser")

    deferred_refs = soup.find_all("a", attrs={DEFERRED_ATTR: "true"})
    if not deferred_refs:
        return RewriteResult(html=html)

    footnote_mapping: dict[str, str] = {}
    for ref in soup.find_all("a", attrs={DEFERRED_ATTR: "false"}):
        identifier = ref.get(FOOTNOTE_ID_ATTR)
        number = ref.get_text().strip()
        if identifier and number:
            footnote_mapping[identifier] = number

    resolved: list[str] = []
    unresolved: list[str] = []
    for ref in deferred_refs:
        identifier = ref.get(FOOTNOTE_ID_ATTR)
        if not identifier:
            continue
        number = footnote_mapping.get(identifier)
        if number is None:
            if identifier not in unresolved:
                unresolved.append(identifier)
            continue
        if ref.get_text().strip() == number:
            continue
        logger.debug("Fixed deferred footnote %s: %s -> %s", identifier, ref.get_text(), number)
        ref.string = number
        resolved.append(identifier)

    if strict is None:
        strict = get_config().strict

    if unresolved:
        if strict:
            raise UnresolvedAnchorError(source, unresolved)
        logger.warning(
            "%sDeferred footnotes left unresolved: %s",
            f"{source}: " if source else "",
            ", ".join(unresolved),
        )

    if not resolved:
        return RewriteResult(html=html, unresolved=tuple(unresolved))

    return RewriteResult(
        html=soup.decode(formatter=_FORMATTER),
        changed=True,
        resolved=tuple(resolved),
        unresolved=tuple(unresolved),
    )


def find_html_files(root: str | Path, suffix: str | None = None) -> list[Path]:
    """Find every output unit under ``root``, recursively, sorted.

    Uses an explicit stack so deep output trees cannot hit the recursion limit.
    """
    suffix = suffix or get_config().output_suffix
    found: list[Path] = []
    stack = [Path(root)]
    while stack:
        directory = stack.pop()
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    stack.append(Path(entry.path))
                elif entry.is_file() and entry.name.endswith(suffix):
                    found.append(Path(entry.path))
    return sorted(found)


def _write_atomic(path: Path, text: str) -> None:
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp)
        raise


def process_html_file(path: str | Path, *, strict: bool | None = None) -> RewriteResult:
    """Rewrite one output unit in place if any deferred anchor changes.

    The file is either fully replaced or left byte-for-byte untouched.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8", newline="") as f:
            html = f.read()
    except UnicodeDecodeError as e:
        raise UnreadableOutputError(str(path), f"not valid UTF-8 ({e.reason} at byte {e.start})") from e

    result = process_html_string(html, source=str(path), strict=strict)
    if result.changed:
        _write_atomic(path, result.html)
        logger.info("Updated %s", path)
    return result


def process_html_files(root: str | Path, *, suffix: str | None = None, strict: bool | None = None) -> RewriteReport:
    """Run the rewrite pass over every output unit under ``root``.

    Errors (I/O, undecodable units, strict-mode UnresolvedAnchorError)
    abort the pass.
    """
    report = RewriteReport()
    for path in find_html_files(root, suffix):
        result = process_html_file(path, strict=strict)
        report.scanned += 1
        if result.changed:
            report.updated.append(path)
        if result.unresolved:
            report.unresolved[path] = result.unresolved
    return report


__all__ = [
    "RewriteReport",
    "RewriteResult",
    "find_html_files",
    "process_html_file",
    "process_html_files",
    "process_html_string",
]
