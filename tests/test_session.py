"""Unit tests for SessionStore (bundle_creator.session)."""

from __future__ import annotations

from pathlib import Path

import pytest

from bundle_creator.session import LAST_ARCHIVE_KEY, SessionStore

pytestmark = pytest.mark.unit


@pytest.fixture
def store(tmp_path: Path) -> SessionStore:
    return SessionStore(tmp_path / "var" / "session.json")


class TestSessionStore:
    def test_missing_file_is_empty(self, store):
        assert store.get(LAST_ARCHIVE_KEY) is None
        assert store.get(LAST_ARCHIVE_KEY, "fallback") == "fallback"

    def test_set_and_get(self, store):
        store.set(LAST_ARCHIVE_KEY, "system/tmp/demo.zip")
        assert store.get(LAST_ARCHIVE_KEY) == "system/tmp/demo.zip"

    def test_set_creates_parents(self, store):
        store.set("k", "v")
        assert store.path.exists()

    def test_overwrite_value(self, store):
        store.set(LAST_ARCHIVE_KEY, "a.zip")
        store.set(LAST_ARCHIVE_KEY, "b.zip")
        assert store.get(LAST_ARCHIVE_KEY) == "b.zip"

    def test_shared_between_instances(self, store):
        store.set(LAST_ARCHIVE_KEY, "a.zip")
        assert SessionStore(store.path).get(LAST_ARCHIVE_KEY) == "a.zip"

    def test_clear_key(self, store):
        store.set("a", 1)
        store.set("b", 2)
        store.clear("a")
        assert store.get("a") is None
        assert store.get("b") == 2

    def test_clear_all(self, store):
        store.set("a", 1)
        store.clear()
        assert store.get("a") is None

    def test_corrupted_file_reads_as_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{broken", encoding="utf-8")
        assert store.get(LAST_ARCHIVE_KEY) is None
        store.set(LAST_ARCHIVE_KEY, "a.zip")
        assert store.get(LAST_ARCHIVE_KEY) == "a.zip"
