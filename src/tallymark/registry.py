"""Footnote numbering registry.

Assigns 1-based, gap-free numbers to footnote identifiers in the order they
are first registered as *normal* references. An identifier may be registered
as *deferred* first (a header callout that appears before the body text),
in which case it holds no number until the body reaches it.

Each identifier moves through a small state machine:

    UNREGISTERED -> DEFERRED -> ASSIGNED
    UNREGISTERED -----------> ASSIGNED

ASSIGNED is terminal; further registrations return the same number.

Usage:
    >>> registry = FootnoteRegistry()
    >>> registry.register("a", deferred=True)
    0
    >>> registry.register("b")
    1
    >>> registry.register("a")
    2

Thread Safety:
    Not thread-safe. A registry belongs to exactly one page render; create a
    new one per page rather than sharing an instance.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from tallymark.errors import DeferredNotResolvedError
from tallymark.utils.logger import get_logger

logger = get_logger(__name__)

# Returned by register() for deferred identifiers that have no number yet
UNASSIGNED = 0


class FootnoteState(Enum):
    """Registration state of a single footnote identifier."""

    UNREGISTERED = auto()
    DEFERRED = auto()
    ASSIGNED = auto()


@dataclass(frozen=True, slots=True)
class FootnoteEntry:
    """An identifier paired with its assigned number."""

    identifier: str
    number: int


@dataclass(slots=True)
class _Slot:
    state: FootnoteState
    number: int = UNASSIGNED
    was_deferred: bool = False


class FootnoteRegistry:
    """Per-page mapping from footnote identifier to reference number."""

    __slots__ = ("_counter", "_order", "_slots")

    def __init__(self) -> None:
        self._slots: dict[str, _Slot] = {}
        self._order: list[str] = []
        self._counter = 0

    def register(self, identifier: str, deferred: bool = False) -> int:
        """Register a footnote reference and return its number.

        Args:
            identifier: Footnote identifier (exact string match)
            deferred: Withhold the number until a normal registration arrives

        Returns:
            The assigned number, or 0 if the identifier is (still) deferred.
        """
        slot = self._slots.get(identifier)
        if slot is not None and slot.state is FootnoteState.ASSIGNED:
            return slot.number

        if deferred:
            if slot is None:
                self._slots[identifier] = _Slot(FootnoteState.DEFERRED, was_deferred=True)
            return UNASSIGNED

        if slot is None:
            slot = self._slots[identifier] = _Slot(FootnoteState.UNREGISTERED)

        self._counter += 1
        slot.state = FootnoteState.ASSIGNED
        slot.number = self._counter
        self._order.append(identifier)
        logger.debug(
            "Assigned footnote %r -> %d%s",
            identifier,
            slot.number,
            " (was deferred)" if slot.was_deferred else "",
        )
        return slot.number

    def get_number(self, identifier: str) -> int | None:
        """Return the assigned number, or None if the identifier has none."""
        slot = self._slots.get(identifier)
        if slot is None or slot.state is not FootnoteState.ASSIGNED:
            return None
        return slot.number

    def state_of(self, identifier: str) -> FootnoteState:
        slot = self._slots.get(identifier)
        return FootnoteState.UNREGISTERED if slot is None else slot.state

    def get_all_footnotes(self) -> list[FootnoteEntry]:
        """All numbered footnotes, in assignment order."""
        return [FootnoteEntry(i, self._slots[i].number) for i in self._order]

    def get_deferred_mappings(self) -> list[FootnoteEntry]:
        """Footnotes that were registered deferred and have since been numbered.

        The rewrite pass needs exactly these to repair placeholder anchors.
        """
        return [
            FootnoteEntry(i, self._slots[i].number)
            for i in self._order
            if self._slots[i].was_deferred
        ]

    def get_deferred_footnotes(self) -> list[str]:
        """Identifiers still awaiting a number, in registration order."""
        return [
            identifier
            for identifier, slot in self._slots.items()
            if slot.state is FootnoteState.DEFERRED
        ]

    def validate_no_deferred_footnotes(self) -> None:
        """Fail if any deferred footnote was never referenced in the body.

        Raises:
            DeferredNotResolvedError: One or more identifiers remain deferred.
        """
        pending = self.get_deferred_footnotes()
        if pending:
            raise DeferredNotResolvedError(pending)

    def reset(self) -> None:
        """Forget every registration and restart numbering at 1."""
        self._slots.clear()
        self._order.clear()
        self._counter = 0

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._slots

    def __repr__(self) -> str:
        return (
            f"FootnoteRegistry(assigned={len(self._order)}, "
            f"deferred={len(self.get_deferred_footnotes())})"
        )


__all__ = [
    "UNASSIGNED",
    "FootnoteEntry",
    "FootnoteRegistry",
    "FootnoteState",
]
