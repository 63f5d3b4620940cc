from pathlib import Path

import pytest

from dd_switch.core.models import SyncStatus
from dd_switch.ui.controllers.switch_controller import OperationResult, SwitchController


@pytest.fixture
def controller(context):
    return SwitchController(context)


def test_create_and_list(controller):
    result = controller.create("claude")

    assert isinstance(result, OperationResult)
    assert result.success
    assert result.message == "Created: claude"
    assert [e.name for e in controller.list_configs()] == ["claude"]


def test_failures_become_results(controller):
    result = controller.create("   ")
    assert not result.success
    assert result.details["error"] == "InvalidNameError"

    controller.create("a")
    dup = controller.create("a")
    assert not dup.success
    assert dup.details["error"] == "AlreadyExistsError"


def test_list_configs_empty_when_root_missing(controller, tmp_path):
    controller.set_root(str(tmp_path / "missing"))
    assert controller.list_configs() == []
    assert controller.check_root_exists() is False


def test_save_reapplies_active_entry(controller, tracker):
    path = controller.create("a").details["path"]
    controller.apply(path)

    result = controller.save(path, '{"v": 2}')

    assert result.success
    assert result.details["reapplied"] is True
    assert tracker.live_path.read_text(encoding="utf-8") == '{"v": 2}'
    assert controller.sync_status() == SyncStatus.IN_SYNC


def test_save_inactive_entry_leaves_live_file(controller, tracker):
    a = controller.create("a").details["path"]
    b = controller.create("b").details["path"]
    controller.save(a, "A")
    controller.apply(a)

    result = controller.save(b, "B")

    assert result.details["reapplied"] is False
    assert tracker.live_path.read_text(encoding="utf-8") == "A"


def test_save_reports_invalid_json_without_failing(controller):
    path = controller.create("a").details["path"]
    result = controller.save(path, "{broken")
    assert result.success
    assert result.details["json_error"]
    assert "warning" in result.message
    assert controller.read(path).details["content"] == "{broken"


def test_read_missing(controller, factory_home):
    result = controller.read(str(factory_home / "configs" / "nope.json"))
    assert not result.success
    assert result.details["error"] == "NotFoundError"


def test_rename_returns_new_path(controller):
    path = controller.create("a").details["path"]

    result = controller.rename(path, "b")

    assert result.success
    assert Path(result.details["path"]).stem == "b"
    assert [e.name for e in controller.list_configs()] == ["b"]


def test_delete_clears_active(controller):
    path = controller.create("a").details["path"]
    controller.apply(path)

    assert controller.delete(path).success
    assert controller.get_active() is None
    assert not controller.delete(path).success


def test_delete_refuses_live_settings_file(controller, factory_home):
    live = factory_home / "settings.json"
    live.write_text('{"keep": true}', encoding="utf-8")

    result = controller.delete(str(live))

    assert not result.success
    assert result.details["error"] == "NotFoundError"
    assert live.read_text(encoding="utf-8") == '{"keep": true}'


def test_duplicate_and_reorder(controller):
    a = controller.create("a").details["path"]
    controller.create("b")
    copy = controller.duplicate(a)
    assert copy.success and Path(copy.details["path"]).stem == "a-copy"

    assert controller.reorder(["b", "a-copy", "a"]).success
    assert [e.name for e in controller.list_configs()] == ["b", "a-copy", "a"]

    bad = controller.reorder(["a"])
    assert not bad.success
    assert bad.details["error"] == "InvalidOrderError"


def test_import_current(controller, factory_home):
    assert not controller.import_current().success

    (factory_home / "settings.json").write_text('{"x": 1}', encoding="utf-8")
    result = controller.import_current()
    assert result.success
    assert controller.get_active() == result.details["path"]


def test_adopt_live(controller, factory_home):
    path = controller.create("a").details["path"]
    controller.save(path, "SAME")
    (factory_home / "config.json").write_text("SAME", encoding="utf-8")

    result = controller.adopt_live()

    assert result.success
    assert controller.get_active() == path

    (factory_home / "config.json").write_text("OTHER", encoding="utf-8")
    controller.delete(path)
    assert not controller.adopt_live().success


def test_normalize_rewrites_and_reapplies(controller, tracker):
    path = controller.create("a").details["path"]
    controller.save(path, '{"custom_models": [{"model": "m", "model_display_name": "M 1"}]}')
    controller.apply(path)

    result = controller.normalize(path)

    assert result.success
    assert '"id": "custom:M-1-0"' in result.details["content"]
    assert tracker.live_path.read_text(encoding="utf-8") == result.details["content"]


def test_normalize_invalid_json(controller):
    path = controller.create("a").details["path"]
    controller.save(path, "{nope")
    result = controller.normalize(path)
    assert not result.success
    assert result.details["error"] == "InvalidContentError"


def test_settings_round_trip(controller, tmp_path, factory_home):
    assert controller.get_settings() == {"root": None}

    missing = controller.set_root(str(tmp_path / "missing"))
    assert missing.success
    assert missing.details["exists"] is False

    assert controller.set_root("").details["root"] == str(factory_home / "configs")


def test_queries_survive_unreadable_state(controller, state, factory_home):
    # A directory where the state file should be makes every read fail
    state.path.mkdir(parents=True)

    assert controller.check_root_exists() is False
    assert controller.get_settings() == {"root": None}
    assert controller.effective_root() == str(factory_home / "configs")
    assert controller.list_configs() == []
    assert not controller.create("a").success
