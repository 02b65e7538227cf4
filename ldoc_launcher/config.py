import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


CONFIG_ENV_VAR = "LDOC_LAUNCHER_CONFIG"
PAYLOAD_MODES = ("file", "embedded")

# "?" is expanded by Lua's module resolver; "/" becomes the runtime dir separator.
LUA_PATHS: Tuple[str, ...] = (
    "bin/lua/?.lua",
    "bin/lua/?/init.lua",
    "bin/?.lua",
    "bin/?/init.lua",
    "share/lua/{lua_version}/?.lua",
    "share/lua/{lua_version}/?/init.lua",
    "./?.lua",
    "./?/init.lua",
)

LUA_CPATHS: Tuple[str, ...] = (
    "bin/?.{ext}",
    "lib/lua/{lua_version}/?.{ext}",
    "bin/loadall.{ext}",
    "./?.{ext}",
)


@dataclass(frozen=True)
class LauncherConfig:
    app_name: str = "ldoc"
    script_name: str = "ldoc.lua"
    payload_mode: str = "file"
    lua_paths: Tuple[str, ...] = LUA_PATHS
    lua_cpaths: Tuple[str, ...] = LUA_CPATHS
    log_level: str = "WARNING"

    @property
    def embedded(self) -> bool:
        return self.payload_mode == "embedded"


def native_library_ext() -> str:
    return "dll" if os.name == "nt" else "so"


def expand_template(template: str, lua_version: str, dirsep: str = "/") -> str:
    expanded = template.replace("{lua_version}", lua_version).replace("{ext}", native_library_ext())
    if dirsep != "/":
        expanded = expanded.replace("/", dirsep)
    return expanded


def _str(data: Dict[str, Any], key: str, default: str) -> str:
    val = str(data.get(key, default) or "").strip()
    return val or default


def _templates(data: Dict[str, Any], key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = data.get(key)
    if raw is None:
        return default
    if not isinstance(raw, list) or not raw:
        raise AssertionError(f"{key} must be a non-empty list of path templates")
    for item in raw:
        if not isinstance(item, str) or not item.strip():
            raise AssertionError(f"{key} entries must be non-empty strings, got {item!r}")
    return tuple(raw)


def load_launcher_config(path: Optional[str] = None) -> LauncherConfig:
    """Load launcher settings; without a config file the built-in defaults apply."""
    cfg_path = path or os.environ.get(CONFIG_ENV_VAR, "")
    data: Dict[str, Any] = {}
    if cfg_path:
        resolved = Path(cfg_path).expanduser().resolve()
        if not resolved.exists():
            raise FileNotFoundError(f"Config file not found: {resolved}")
        data = json.loads(resolved.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise AssertionError(f"Config root must be a JSON object: {resolved}")

    payload_mode = str(
        os.environ.get("LDOC_LAUNCHER_PAYLOAD_MODE") or data.get("payload_mode", "file")
    ).strip().lower() or "file"
    if payload_mode not in PAYLOAD_MODES:
        raise AssertionError("payload_mode must be one of: file, embedded")

    log_level = str(
        os.environ.get("LDOC_LAUNCHER_LOG_LEVEL") or data.get("log_level", "WARNING")
    ).strip().upper() or "WARNING"
    if not isinstance(logging.getLevelName(log_level), int):
        raise AssertionError(f"log_level must be a logging level name, got {log_level!r}")

    return LauncherConfig(
        app_name=_str(data, "app_name", "ldoc"),
        script_name=_str(data, "script_name", "ldoc.lua"),
        payload_mode=payload_mode,
        lua_paths=_templates(data, "lua_paths", LUA_PATHS),
        lua_cpaths=_templates(data, "lua_cpaths", LUA_CPATHS),
        log_level=log_level,
    )
