from __future__ import annotations

import json

import pytest

import prefstore.disk_store as disk_store
from prefstore.disk_store import DiskFlatStore
from prefstore.exceptions import IllegalUseError
from prefstore.paths import store_path
from prefstore.preferences import Preferences
from prefstore.values import Int64
from prefstore.versions import Versions


def test_entries_survive_reopen(sandbox_project):
    path = store_path(sandbox_project / "data", "app")
    prefs = Preferences(DiskFlatStore(path), app_version=1)
    prefs.write("flag", True, "count", 3, "ratio", 0.5, "big", Int64(9), "tags", ["a", "b"])

    reopened = DiskFlatStore(path)
    assert reopened.get_bool("flag", False) is True
    assert reopened.get_int32("count", 0) == 3
    assert reopened.get_float32("ratio", 0.0) == 0.5
    assert reopened.get_int64("big", 0) == 9
    assert reopened.get_string("tags", None) == '["a","b"]'

    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["entries"]["count"] == {"kind": "int32", "value": 3}


def test_version_change_detected_across_runs(sandbox_project):
    path = store_path(sandbox_project / "data", "app")
    first_run = Preferences(DiskFlatStore(path), app_version=1)
    assert first_run.check_update() == Versions(1, 1)
    first_run.close()

    second_run = Preferences(DiskFlatStore(path), app_version=2)
    versions = second_run.check_update()
    assert versions.is_updated
    assert (versions.previous, versions.current) == (1, 2)


def test_failed_write_publishes_nothing(sandbox_project, monkeypatch: pytest.MonkeyPatch):
    path = store_path(sandbox_project / "data", "app")
    store = DiskFlatStore(path)
    store.edit().put_int32("keep", 1).apply()
    before = path.read_text(encoding="utf-8")

    def _boom(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(disk_store, "atomic_write_json", _boom)
    with pytest.raises(OSError):
        store.edit().put_int32("a", 1).put_int32("b", 2).put_int32("c", 3).apply()

    assert store.names() == ["keep"]
    assert path.read_text(encoding="utf-8") == before


def test_invalid_document_reads_as_empty(sandbox_project):
    path = store_path(sandbox_project / "data", "broken")
    path.write_text("{not json", encoding="utf-8")
    assert DiskFlatStore(path).names() == []


def test_unreadable_entries_are_dropped(sandbox_project):
    path = store_path(sandbox_project / "data", "partial")
    path.write_text(
        json.dumps({"entries": {"ok": {"kind": "string", "value": "x"}, "bad": {"kind": "blob"}}}),
        encoding="utf-8",
    )
    store = DiskFlatStore(path)
    assert store.names() == ["ok"]


def test_second_store_on_same_file_cannot_be_bound(sandbox_project):
    path = store_path(sandbox_project / "data", "app")
    owner = Preferences(DiskFlatStore(path))
    with pytest.raises(IllegalUseError):
        Preferences(DiskFlatStore(path))
    # same file reached through a different spelling of the path
    with pytest.raises(IllegalUseError):
        Preferences(DiskFlatStore(path.parent / ".." / "prefs" / path.name))

    owner.write("from_owner", 1)
    assert DiskFlatStore(path).contains("from_owner")


def test_closed_owner_releases_the_file(sandbox_project):
    path = store_path(sandbox_project / "data", "app")
    first = Preferences(DiskFlatStore(path))
    first.write("a", 1)
    first.close()

    second = Preferences(DiskFlatStore(path))
    second.write("b", 2)
    assert second.contains("a", "b")


def test_entries_with_wrong_value_type_are_dropped(sandbox_project):
    path = store_path(sandbox_project / "data", "mistyped")
    path.write_text(
        json.dumps(
            {
                "entries": {
                    "n": {"kind": "int32", "value": "abc"},
                    "flag": {"kind": "bool", "value": 1},
                    "wide": {"kind": "int32", "value": 2**40},
                    "ratio": {"kind": "float32", "value": "0.5"},
                    "ok": {"kind": "int64", "value": 2**40},
                }
            }
        ),
        encoding="utf-8",
    )
    store = DiskFlatStore(path)
    assert store.names() == ["ok"]
    assert store.get_int32("n", 7) == 7
    assert store.get_bool("flag", False) is False
