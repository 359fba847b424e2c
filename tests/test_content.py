"""Tests for content collections and front matter loading."""

from pathlib import Path

import pytest

from tallymark.content import (
    ContentCollection,
    ContentEntry,
    ContentStore,
    load_collection,
    load_entry,
    split_front_matter,
)
from tallymark.errors import EntryNotFoundError, TallymarkError


@pytest.fixture
def articles() -> ContentCollection:
    return ContentCollection(
        "articles",
        [
            ContentEntry(slug="advanced", body="B", order=2),
            ContentEntry(slug="intro", body="A", order=1),
            ContentEntry(slug="misc", body="C"),
        ],
    )


class TestFrontMatter:
    def test_splits_yaml(self) -> None:
        data, body = split_front_matter("---\ntitle: Hi\norder: 3\n---\nBody\n")
        assert data == {"title": "Hi", "order": 3}
        assert body == "Body\n"

    def test_no_front_matter(self) -> None:
        assert split_front_matter("Just text") == ({}, "Just text")

    def test_empty_front_matter(self) -> None:
        assert split_front_matter("---\n---\nBody") == ({}, "Body")

    def test_unterminated(self) -> None:
        with pytest.raises(TallymarkError, match="Unterminated"):
            split_front_matter("---\ntitle: x\n")

    def test_non_mapping(self) -> None:
        with pytest.raises(TallymarkError, match="mapping"):
            split_front_matter("---\n- a\n- b\n---\n")


class TestContentCollection:
    def test_get_entry(self, articles: ContentCollection) -> None:
        assert articles.get_entry("intro").body == "A"

    def test_get_entry_missing(self, articles: ContentCollection) -> None:
        with pytest.raises(EntryNotFoundError, match='"nope" not found in collection "articles"') as exc_info:
            articles.get_entry("nope")
        assert exc_info.value.slug == "nope"
        assert exc_info.value.collection == "articles"

    def test_get_ordered_missing_order_sorts_first(self, articles: ContentCollection) -> None:
        assert [e.slug for e in articles.get_ordered()] == ["misc", "intro", "advanced"]

    def test_get_by_ids(self, articles: ContentCollection) -> None:
        assert [e.slug for e in articles.get_by_ids(["advanced", "intro"])] == ["advanced", "intro"]

    def test_get_by_ids_missing(self, articles: ContentCollection) -> None:
        with pytest.raises(EntryNotFoundError, match="ghost"):
            articles.get_by_ids(["intro", "ghost"])

    def test_container_protocol(self, articles: ContentCollection) -> None:
        assert len(articles) == 3
        assert "intro" in articles
        assert [e.slug for e in articles] == ["advanced", "intro", "misc"]


class TestLoading:
    def test_load_collection(self, tmp_path: Path) -> None:
        folder = tmp_path / "articles"
        folder.mkdir()
        (folder / "b.mdx").write_text(
            "---\nid: getting-started\ntitle: Getting Started\norder: 1\nauthor: me\n---\nHello\n",
            encoding="utf-8",
        )
        (folder / "a.md").write_text("No front matter", encoding="utf-8")
        (folder / "notes.txt").write_text("ignored", encoding="utf-8")

        collection = load_collection(folder)

        assert collection.name == "articles"
        assert [e.slug for e in collection] == ["a", "getting-started"]
        entry = collection.get_entry("getting-started")
        assert entry.title == "Getting Started"
        assert entry.order == 1
        assert entry.body == "Hello\n"
        assert entry.collection == "articles"
        assert entry.data == {"author": "me"}

    def test_store_from_directory(self, tmp_path: Path) -> None:
        for name in ("articles", "footnotes"):
            (tmp_path / name).mkdir()
        (tmp_path / "articles" / "x.md").write_text("---\norder: 2\n---\nX", encoding="utf-8")
        (tmp_path / "footnotes" / "islands.md").write_text("Islands text", encoding="utf-8")

        store = ContentStore.from_directory(tmp_path)

        assert store.get_entry("footnotes", "islands").body == "Islands text"

    def test_non_numeric_order_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "x.md"
        path.write_text("---\norder: first\n---\nX", encoding="utf-8")
        with pytest.raises(TallymarkError, match=r"x\.md.*order"):
            load_entry(path)

    def test_float_order_kept(self, tmp_path: Path) -> None:
        path = tmp_path / "x.md"
        path.write_text("---\norder: 1.5\n---\nX", encoding="utf-8")
        assert load_entry(path).order == 1.5

    def test_invalid_yaml_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.md"
        path.write_text("---\ntitle: [unclosed\n---\nX", encoding="utf-8")
        with pytest.raises(TallymarkError, match=r"broken\.md"):
            load_entry(path)


class TestCreateArticlePage:
    @pytest.fixture
    def store(self, articles: ContentCollection) -> ContentStore:
        footnotes = ContentCollection("footnotes", [ContentEntry(slug="n1", body="Note")])
        return ContentStore([articles, footnotes])

    def test_default_is_by_order(self, store: ContentStore) -> None:
        page = store.create_article_page()
        assert [e.slug for e in page.articles] == ["misc", "intro", "advanced"]
        assert page.additional_content == []

    def test_explicit_order_and_additional(self, store: ContentStore) -> None:
        page = store.create_article_page(
            article_order=["intro"],
            additional_content=[("footnotes", "n1")],
        )
        assert [e.slug for e in page.all_content] == ["intro", "n1"]

    def test_missing_additional(self, store: ContentStore) -> None:
        with pytest.raises(EntryNotFoundError):
            store.create_article_page(additional_content=[("footnotes", "zzz")])

    def test_unknown_collection(self, store: ContentStore) -> None:
        with pytest.raises(TallymarkError, match="animals"):
            store.get_entry("animals", "cat")
