from __future__ import annotations

import json

from rollcall.cache.file_cache import JsonFileCache


def test_round_trip_and_missing_key(tmp_path):
    cache = JsonFileCache(tmp_path / "cache")

    assert cache.get_cached_data("rollcall_cached_reports") is None
    assert cache.cache_data("rollcall_cached_reports", [{"id": 1}]) is True
    assert cache.get_cached_data("rollcall_cached_reports") == [{"id": 1}]


def test_overwrite_replaces_value(tmp_path):
    cache = JsonFileCache(tmp_path)
    cache.cache_data("k", {"v": 1})
    cache.cache_data("k", {"v": 2})

    assert cache.get_cached_data("k") == {"v": 2}
    assert [p.name for p in tmp_path.iterdir()] == ["k.json"]


def test_file_records_key_and_timestamp(tmp_path):
    JsonFileCache(tmp_path).cache_data("rollcall_absentee_records", [])

    payload = json.loads((tmp_path / "rollcall_absentee_records.json").read_text(encoding="utf-8"))
    assert payload["key"] == "rollcall_absentee_records"
    assert payload["cached_at"]
    assert payload["value"] == []


def test_unsafe_key_stays_inside_directory(tmp_path):
    cache = JsonFileCache(tmp_path)
    cache.cache_data("../escape", 1)

    assert cache.get_cached_data("../escape") == 1
    assert not (tmp_path.parent / "escape.json").exists()


def test_unserialisable_value_is_reported_not_raised(tmp_path):
    cache = JsonFileCache(tmp_path)

    assert cache.cache_data("k", object()) is False
    assert cache.get_cached_data("k") is None
    assert not any(p.name.startswith(".tmp-") for p in tmp_path.iterdir())


def test_corrupt_file_reads_as_missing(tmp_path):
    (tmp_path / "k.json").write_text("{not json", encoding="utf-8")

    assert JsonFileCache(tmp_path).get_cached_data("k") is None

