"""Tests for FootnoteRegistry numbering and deferred resolution."""

import pytest

from tallymark.errors import DeferredNotResolvedError, TallymarkError
from tallymark.registry import FootnoteEntry, FootnoteRegistry, FootnoteState

# =========================================================================
# Normal registration
# =========================================================================


class TestNormalRegistration:
    """Numbers follow first-registration order, starting at 1."""

    def test_empty_registry(self) -> None:
        registry = FootnoteRegistry()
        assert registry.get_all_footnotes() == []
        assert registry.get_deferred_footnotes() == []
        assert registry.get_deferred_mappings() == []
        assert len(registry) == 0

    def test_sequential_numbers(self) -> None:
        registry = FootnoteRegistry()
        assert [registry.register(i) for i in ("a", "b", "c")] == [1, 2, 3]

    def test_repeat_registration_is_idempotent(self) -> None:
        registry = FootnoteRegistry()
        assert registry.register("a") == 1
        assert registry.register("a") == 1
        assert registry.register("b") == 2

    def test_deferred_registration_after_assignment_returns_number(self) -> None:
        registry = FootnoteRegistry()
        registry.register("a")
        assert registry.register("a", deferred=True) == 1
        assert registry.get_deferred_footnotes() == []

    def test_get_number(self) -> None:
        registry = FootnoteRegistry()
        registry.register("a")
        assert registry.get_number("a") == 1
        assert registry.get_number("missing") is None

    def test_get_number_does_not_register(self) -> None:
        registry = FootnoteRegistry()
        registry.get_number("a")
        assert "a" not in registry
        assert registry.register("b") == 1

    def test_all_footnotes_in_assignment_order(self) -> None:
        registry = FootnoteRegistry()
        registry.register("z")
        registry.register("a")
        assert registry.get_all_footnotes() == [FootnoteEntry("z", 1), FootnoteEntry("a", 2)]

    def test_identifiers_compared_exactly(self) -> None:
        registry = FootnoteRegistry()
        registry.register("Note")
        assert registry.register("note") == 2
        assert registry.register("note ") == 3


# =========================================================================
# Deferred registration
# =========================================================================


class TestDeferredRegistration:
    """Deferred identifiers wait for a normal registration to get a number."""

    def test_deferred_returns_zero(self) -> None:
        registry = FootnoteRegistry()
        assert registry.register("a", deferred=True) == 0
        assert registry.get_number("a") is None
        assert registry.state_of("a") is FootnoteState.DEFERRED

    def test_deferred_does_not_advance_counter(self) -> None:
        registry = FootnoteRegistry()
        registry.register("a", deferred=True)
        registry.register("b", deferred=True)
        assert registry.register("c") == 1

    def test_resolution_follows_body_order(self) -> None:
        registry = FootnoteRegistry()
        assert registry.register("a", deferred=True) == 0
        assert registry.register("b") == 1
        assert registry.register("a") == 2
        assert registry.get_number("a") == 2
        assert registry.get_deferred_mappings() == [FootnoteEntry("a", 2)]

    def test_deferred_twice_stays_deferred(self) -> None:
        registry = FootnoteRegistry()
        registry.register("a", deferred=True)
        assert registry.register("a", deferred=True) == 0
        assert registry.get_deferred_footnotes() == ["a"]

    def test_mappings_exclude_unresolved(self) -> None:
        registry = FootnoteRegistry()
        registry.register("a", deferred=True)
        registry.register("b", deferred=True)
        registry.register("b")
        assert registry.get_deferred_mappings() == [FootnoteEntry("b", 1)]
        assert registry.get_deferred_footnotes() == ["a"]

    def test_mappings_exclude_never_deferred(self) -> None:
        registry = FootnoteRegistry()
        registry.register("x")
        registry.register("a", deferred=True)
        registry.register("a")
        assert registry.get_deferred_mappings() == [FootnoteEntry("a", 2)]

    def test_states(self) -> None:
        registry = FootnoteRegistry()
        assert registry.state_of("a") is FootnoteState.UNREGISTERED
        registry.register("a", deferred=True)
        assert registry.state_of("a") is FootnoteState.DEFERRED
        registry.register("a")
        assert registry.state_of("a") is FootnoteState.ASSIGNED


# =========================================================================
# Validation and reset
# =========================================================================


class TestValidation:
    """validate_no_deferred_footnotes is the publish gate for a page."""

    def test_passes_when_nothing_deferred(self) -> None:
        registry = FootnoteRegistry()
        registry.register("a")
        registry.validate_no_deferred_footnotes()

    def test_passes_when_all_resolved(self) -> None:
        registry = FootnoteRegistry()
        registry.register("a", deferred=True)
        registry.register("a")
        registry.validate_no_deferred_footnotes()

    def test_fails_naming_unresolved(self) -> None:
        registry = FootnoteRegistry()
        registry.register("x", deferred=True)
        registry.register("y", deferred=True)
        registry.register("x")
        with pytest.raises(DeferredNotResolvedError, match="y") as exc_info:
            registry.validate_no_deferred_footnotes()
        assert exc_info.value.identifiers == ("y",)

    def test_message_is_comma_joined(self) -> None:
        registry = FootnoteRegistry()
        registry.register("p", deferred=True)
        registry.register("q", deferred=True)
        with pytest.raises(DeferredNotResolvedError) as exc_info:
            registry.validate_no_deferred_footnotes()
        assert "p, q" in str(exc_info.value)
        assert isinstance(exc_info.value, TallymarkError)


class TestReset:
    """reset() returns the registry to its initial state."""

    def test_reset_clears_everything(self) -> None:
        registry = FootnoteRegistry()
        registry.register("a", deferred=True)
        registry.register("b")
        registry.register("a")
        registry.register("c", deferred=True)

        registry.reset()

        assert registry.get_all_footnotes() == []
        assert registry.get_deferred_footnotes() == []
        assert registry.get_deferred_mappings() == []
        assert registry.register("c") == 1

    def test_instances_are_independent(self) -> None:
        first = FootnoteRegistry()
        second = FootnoteRegistry()
        first.register("a")
        assert second.get_number("a") is None
        assert second.register("b") == 1
