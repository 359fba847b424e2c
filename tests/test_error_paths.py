"""Error construction, formatting and hierarchy."""

from tallymark.errors import (
    DeferredNotResolvedError,
    EntryNotFoundError,
    MissingFootnoteError,
    TallymarkError,
    UnreadableOutputError,
    UnresolvedAnchorError,
)

# =========================================================================
# DeferredNotResolvedError
# =========================================================================


class TestDeferredNotResolvedError:
    def test_lists_identifiers(self) -> None:
        err = DeferredNotResolvedError(["a", "b"])
        assert err.identifiers == ("a", "b")
        assert "a, b" in str(err)

    def test_is_tallymark_error(self) -> None:
        assert isinstance(DeferredNotResolvedError(["x"]), TallymarkError)


# =========================================================================
# MissingFootnoteError
# =========================================================================


class TestMissingFootnoteError:
    def test_message_only(self) -> None:
        err = MissingFootnoteError("ghost")
        assert str(err) == "Footnote 'ghost' has not been registered"
        assert err.source is None

    def test_with_source(self) -> None:
        err = MissingFootnoteError("ghost", source="intro")
        assert "in 'intro'" in str(err)


# =========================================================================
# EntryNotFoundError / UnresolvedAnchorError
# =========================================================================


class TestOtherErrors:
    def test_entry_not_found(self) -> None:
        err = EntryNotFoundError("cat", "animals")
        assert str(err) == 'Entry "cat" not found in collection "animals"'
        assert isinstance(err, TallymarkError)

    def test_unresolved_anchor_with_path(self) -> None:
        err = UnresolvedAnchorError("dist/index.html", ["x"])
        assert str(err).startswith("dist/index.html: ")
        assert err.identifiers == ("x",)

    def test_unresolved_anchor_without_path(self) -> None:
        err = UnresolvedAnchorError(None, ["x", "y"])
        assert str(err) == "No resolved number for deferred footnotes: x, y"

    def test_unreadable_output(self) -> None:
        err = UnreadableOutputError("dist/bad.html", "not valid UTF-8")
        assert str(err) == "dist/bad.html: not valid UTF-8"
        assert err.path == "dist/bad.html"
        assert isinstance(err, TallymarkError)
