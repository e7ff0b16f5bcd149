"""Tests for the file-based printed-task cache."""

import json

import pytest

from phabprint.adapters.file_cache import FilePrintCache


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "data" / "printed-tasks.json"


@pytest.fixture
def cache(cache_path):
    c = FilePrintCache(cache_path)
    c.load()
    return c


class TestLoad:
    def test_missing_file_starts_empty(self, cache_path):
        cache = FilePrintCache(cache_path)
        assert cache.load() == set()
        assert not cache_path.exists()

    def test_loads_existing_ids(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text('["T1", "T2"]')

        cache = FilePrintCache(path)

        assert cache.load() == {"T1", "T2"}
        assert cache.has("T1")

    def test_malformed_json_starts_empty(self, tmp_path, caplog):
        path = tmp_path / "cache.json"
        path.write_text("{not json")

        cache = FilePrintCache(path)

        assert cache.load() == set()
        assert "Could not load printed tasks cache" in caplog.text

    def test_invalid_utf8_starts_empty(self, tmp_path, caplog):
        path = tmp_path / "cache.json"
        path.write_bytes(b'["T1", "\xff\xfe"]')

        assert FilePrintCache(path).load() == set()
        assert "Could not load printed tasks cache" in caplog.text

    def test_non_list_json_starts_empty(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text('{"T1": true}')

        assert FilePrintCache(path).load() == set()

    def test_unreadable_path_starts_empty(self, tmp_path):
        # A directory in place of the file makes read_text fail
        path = tmp_path / "cache.json"
        path.mkdir()

        assert FilePrintCache(path).load() == set()


class TestMarkPrinted:
    def test_has(self, cache):
        assert cache.has("T1") is False
        cache.mark_printed("T1")
        assert cache.has("T1") is True
        assert "T1" in cache
        assert len(cache) == 1

    def test_survives_restart(self, cache, cache_path):
        cache.mark_printed("T1")

        reloaded = FilePrintCache(cache_path)

        assert "T1" in reloaded.load()

    def test_file_is_json_array(self, cache, cache_path):
        cache.mark_printed("T2")
        cache.mark_printed("T1")

        assert json.loads(cache_path.read_text()) == ["T1", "T2"]

    def test_no_temp_file_left_behind(self, cache, cache_path):
        cache.mark_printed("T1")
        assert [p.name for p in cache_path.parent.iterdir()] == ["printed-tasks.json"]

    def test_persist_failure_keeps_memory(self, tmp_path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        # Parent "directory" is a file, so the write fails
        cache = FilePrintCache(blocker / "cache.json")

        cache.mark_printed("T1")

        assert cache.has("T1") is True
        assert "Could not save printed tasks cache" in caplog.text


class TestClear:
    def test_clear_resets_memory_and_disk(self, cache, cache_path):
        cache.mark_printed("T1")
        cache.mark_printed("T2")

        cache.clear()

        assert cache.has("T1") is False
        assert cache.has("T2") is False
        assert FilePrintCache(cache_path).load() == set()
        assert json.loads(cache_path.read_text()) == []

    def test_clear_without_existing_file(self, cache_path):
        FilePrintCache(cache_path).clear()
        assert json.loads(cache_path.read_text()) == []
