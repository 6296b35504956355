"""Tests for the store data model."""

import json

from legosigno.models import Entry, Store, find_entry


class TestStore:
    def test_json_uses_folder_key(self):
        store = Store(bookmarks=[Entry(path="/a", score=2)])
        data = json.loads(store.to_json())
        assert data == {"bookmarks": [{"folder": "/a", "score": 2}], "visits": []}

    def test_round_trip(self):
        store = Store(
            bookmarks=[Entry(path="/z", score=1), Entry(path="/a", score=3)],
            visits=[Entry(path="/v", score=1_700_000_000_000_000_000)],
        )
        loaded = Store.from_json(store.to_json())
        assert loaded == store
        assert [b.path for b in loaded.bookmarks] == ["/z", "/a"]

    def test_unknown_fields_ignored(self):
        text = '{"bookmarks": [{"folder": "/a", "score": 1, "color": "red"}], "extra": 1}'
        store = Store.from_json(text)
        assert store.bookmarks == [Entry(path="/a", score=1)]
        assert store.visits == []

    def test_missing_fields_default(self):
        store = Store.from_json('{"visits": [{"folder": "/v"}]}')
        assert store.bookmarks == []
        assert store.visits[0].score == 0


class TestFindEntry:
    def test_found(self):
        entries = [Entry(path="/a"), Entry(path="/b")]
        assert find_entry(entries, "/b") == 1

    def test_missing(self):
        assert find_entry([Entry(path="/a")], "/b") == -1


class TestNormalize:
    def test_keeps_first_bookmark_and_latest_visit(self):
        store = Store(
            bookmarks=[Entry(path="/a", score=2), Entry(path="/b", score=1), Entry(path="/a", score=7)],
            visits=[Entry(path="/v", score=5), Entry(path="/v", score=9), Entry(path="/v", score=1)],
        )
        assert store.normalize() == 3
        assert store.bookmarks == [Entry(path="/a", score=2), Entry(path="/b", score=1)]
        assert store.visits == [Entry(path="/v", score=9)]

    def test_drops_empty_paths(self):
        store = Store(bookmarks=[Entry(score=1)], visits=[Entry(path="", score=4)])
        assert store.normalize() == 2
        assert store == Store()

    def test_clean_store_untouched(self):
        store = Store(bookmarks=[Entry(path="/a", score=1)])
        assert store.normalize() == 0
        assert store.bookmarks == [Entry(path="/a", score=1)]
