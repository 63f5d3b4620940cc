from pathlib import Path

import pytest

from dd_switch.core.exceptions import NotFoundError
from dd_switch.core.models import SyncStatus


def test_no_active_initially(tracker):
    assert tracker.get_active() is None
    assert tracker.sync_status() == SyncStatus.NO_ACTIVE


def test_apply_copies_bytes_and_sets_marker(make_entries, tracker, store, factory_home):
    content = '{\r\n  "customModels": [{"displayName": "Ünïcode"}]\r\n}'
    paths = make_entries({"claude": content})

    tracker.apply(paths["claude"])

    live = factory_home / "config.json"
    assert tracker.live_path == live
    assert live.read_bytes() == Path(paths["claude"]).read_bytes()
    assert live.read_bytes().decode("utf-8") == store.read(paths["claude"])
    assert tracker.get_active() == paths["claude"]
    assert tracker.sync_status() == SyncStatus.IN_SYNC


def test_apply_prefers_existing_settings_json(make_entries, tracker, factory_home):
    (factory_home / "settings.json").write_text("{}", encoding="utf-8")
    paths = make_entries({"a": '{"a": 1}'})

    tracker.apply(paths["a"])

    assert (factory_home / "settings.json").read_text(encoding="utf-8") == '{"a": 1}'
    assert not (factory_home / "config.json").exists()


def test_apply_switches_between_entries(make_entries, tracker):
    paths = make_entries({"a": "A", "b": "B"})

    tracker.apply(paths["a"])
    tracker.apply(paths["b"])

    assert tracker.get_active() == paths["b"]
    assert tracker.live_path.read_text(encoding="utf-8") == "B"


def test_apply_rejects_paths_outside_root(tracker, tmp_path, state):
    stray = tmp_path / "stray.json"
    stray.write_text("{}", encoding="utf-8")

    with pytest.raises(NotFoundError):
        tracker.apply(str(stray))
    assert state.load().active is None
    assert not tracker.live_path.exists()


def test_apply_missing_entry_raises(make_entries, tracker, store):
    paths = make_entries({"a": "A"})
    Path(paths["a"]).unlink()
    with pytest.raises(NotFoundError):
        tracker.apply(paths["a"])


def test_edit_without_reapply_drifts(make_entries, tracker, store):
    paths = make_entries({"a": "v1"})
    tracker.apply(paths["a"])

    store.save(paths["a"], "v2")

    assert tracker.live_path.read_text(encoding="utf-8") == "v1"
    assert tracker.sync_status() == SyncStatus.DRIFTED

    tracker.apply(paths["a"])
    assert tracker.sync_status() == SyncStatus.IN_SYNC


def test_live_missing_status(make_entries, tracker):
    paths = make_entries({"a": "A"})
    tracker.apply(paths["a"])
    tracker.live_path.unlink()

    assert tracker.sync_status() == SyncStatus.LIVE_MISSING


def test_dangling_marker_reads_as_none(make_entries, tracker, state):
    paths = make_entries({"a": "A"})
    tracker.apply(paths["a"])

    # File removed behind the store's back
    Path(paths["a"]).unlink()

    assert tracker.get_active() is None
    assert state.load().active == paths["a"]


def test_marker_outside_current_root_reads_as_none(make_entries, tracker, store, tmp_path):
    paths = make_entries({"a": "A"})
    tracker.apply(paths["a"])
    other = tmp_path / "other"
    other.mkdir()

    store.set_root(str(other))
    assert tracker.get_active() is None

    store.set_root("")
    assert tracker.get_active() == paths["a"]


def test_find_matching_entry(make_entries, tracker, factory_home, state):
    paths = make_entries({"a": "A", "b": "B"})
    (factory_home / "config.json").write_text("B", encoding="utf-8")

    assert tracker.find_matching_entry() == paths["b"]
    assert state.load().active is None

    (factory_home / "config.json").write_text("C", encoding="utf-8")
    assert tracker.find_matching_entry() is None
