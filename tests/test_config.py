import json

import pytest

from ldoc_launcher.config import (
    LUA_CPATHS,
    LUA_PATHS,
    LauncherConfig,
    expand_template,
    load_launcher_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LDOC_LAUNCHER_CONFIG", "LDOC_LAUNCHER_PAYLOAD_MODE", "LDOC_LAUNCHER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def _write_cfg(tmp_path, data):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return p


def test_defaults_without_config_file():
    cfg = load_launcher_config()
    assert cfg == LauncherConfig()
    assert cfg.script_name == "ldoc.lua"
    assert cfg.payload_mode == "file"
    assert cfg.lua_paths == LUA_PATHS
    assert cfg.lua_cpaths == LUA_CPATHS


def test_config_file_from_env(tmp_path, monkeypatch):
    cfg_path = _write_cfg(tmp_path, {
        "app_name": "mydoc",
        "script_name": "mydoc.lua",
        "payload_mode": "Embedded",
        "lua_paths": ["share/?.lua"],
    })
    monkeypatch.setenv("LDOC_LAUNCHER_CONFIG", str(cfg_path))
    cfg = load_launcher_config()
    assert cfg.app_name == "mydoc"
    assert cfg.script_name == "mydoc.lua"
    assert cfg.embedded
    assert cfg.lua_paths == ("share/?.lua",)
    assert cfg.lua_cpaths == LUA_CPATHS


def test_env_overrides_file(tmp_path, monkeypatch):
    cfg_path = _write_cfg(tmp_path, {"payload_mode": "embedded", "log_level": "info"})
    monkeypatch.setenv("LDOC_LAUNCHER_PAYLOAD_MODE", "file")
    monkeypatch.setenv("LDOC_LAUNCHER_LOG_LEVEL", "debug")
    cfg = load_launcher_config(str(cfg_path))
    assert cfg.payload_mode == "file"
    assert cfg.log_level == "DEBUG"


def test_invalid_payload_mode(tmp_path):
    cfg_path = _write_cfg(tmp_path, {"payload_mode": "zip"})
    with pytest.raises(AssertionError):
        load_launcher_config(str(cfg_path))


@pytest.mark.parametrize("templates", [[], "bin/?.lua", ["bin/?.lua", 3], ["  "]])
def test_invalid_templates(tmp_path, templates):
    cfg_path = _write_cfg(tmp_path, {"lua_cpaths": templates})
    with pytest.raises(AssertionError):
        load_launcher_config(str(cfg_path))


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_launcher_config(str(tmp_path / "nope.json"))


def test_expand_template(monkeypatch):
    monkeypatch.setattr("ldoc_launcher.config.native_library_ext", lambda: "dll")
    assert expand_template("lib/lua/{lua_version}/?.{ext}", "5.4") == "lib/lua/5.4/?.dll"
    assert expand_template("lib/lua/{lua_version}/?.{ext}", "5.4", "\\") == "lib\\lua\\5.4\\?.dll"


@pytest.mark.parametrize("level", ["root", "loud", "BASIC_FORMAT"])
def test_invalid_log_level(tmp_path, level):
    cfg_path = _write_cfg(tmp_path, {"log_level": level})
    with pytest.raises(AssertionError):
        load_launcher_config(str(cfg_path))


def test_log_level_names_accepted(tmp_path):
    cfg_path = _write_cfg(tmp_path, {"log_level": "error"})
    assert load_launcher_config(str(cfg_path)).log_level == "ERROR"
