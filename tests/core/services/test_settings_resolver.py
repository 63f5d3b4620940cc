from pathlib import Path

import pytest

from dd_switch.core.services.settings_resolver import SettingsResolver, default_factory_home


@pytest.fixture
def resolver(tmp_path):
    return SettingsResolver(tmp_path / "factory")


def test_resolve_defaults(resolver, tmp_path):
    expected = tmp_path / "factory" / "configs"
    assert resolver.default_root == expected
    assert resolver.resolve(None) == expected
    assert resolver.resolve("") == expected
    assert resolver.resolve("   ") == expected


def test_resolve_trims_override(resolver, tmp_path):
    assert resolver.resolve(f"  {tmp_path / 'mine'}\n") == tmp_path / "mine"


def test_resolve_has_no_side_effects(resolver, tmp_path):
    resolver.resolve(str(tmp_path / "never-created"))
    assert not (tmp_path / "never-created").exists()
    assert not resolver.default_root.exists()


def test_exists_never_raises(tmp_path):
    (tmp_path / "file.txt").write_text("x", encoding="utf-8")
    assert SettingsResolver.exists(tmp_path) is True
    assert SettingsResolver.exists(tmp_path / "missing") is False
    assert SettingsResolver.exists(tmp_path / "file.txt") is False
    assert SettingsResolver.exists(None) is False


def test_live_settings_path_order(resolver, tmp_path):
    home = tmp_path / "factory"
    home.mkdir()
    assert resolver.live_settings_path() == home / "config.json"

    (home / "config.json").write_text("{}", encoding="utf-8")
    assert resolver.live_settings_path() == home / "config.json"

    (home / "settings.json").write_text("{}", encoding="utf-8")
    assert resolver.live_settings_path() == home / "settings.json"


def test_live_settings_candidates_required(tmp_path):
    with pytest.raises(ValueError):
        SettingsResolver(tmp_path, live_settings_files=())


def test_default_factory_home_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("DD_SWITCH_FACTORY_HOME", str(tmp_path / "custom"))
    assert default_factory_home() == tmp_path / "custom"

    monkeypatch.delenv("DD_SWITCH_FACTORY_HOME")
    assert default_factory_home("~/.factory") == Path.home() / ".factory"


def test_resolve_makes_relative_paths_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    resolver = SettingsResolver(Path("factory"))

    assert resolver.default_root == tmp_path / "factory" / "configs"
    assert resolver.resolve("mine") == tmp_path / "mine"
    assert resolver.resolve("mine").is_absolute()
