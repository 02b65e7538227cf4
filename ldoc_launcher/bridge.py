"""Lua-side routine that builds package.path and package.cpath.

The routine is defined inside the runtime so that separator handling uses
the runtime's own conventions from ``package.config``: the first line is the
directory separator, the second the search-path separator.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence, Tuple

from ldoc_launcher.config import expand_template

log = logging.getLogger(__name__)

BRIDGE_NAME = "set_search_paths"

SET_SEARCH_PATHS_LUA = r"""
function set_search_paths(base, paths, cpaths)
   local dirsep, pathsep = package.config:match("^([^\n]*)\n([^\n]*)")
   local seps = "[" .. (dirsep:gsub("%p", "%%%0")) .. "/]"
   local root = (base:gsub(seps .. "+$", ""))
   local function build(templates)
      local full = {}
      for _, template in ipairs(templates) do
         local tail = template:gsub("^" .. seps .. "+", ""):gsub(seps .. "+$", "")
         table.insert(full, root .. dirsep .. tail)
      end
      return table.concat(full, pathsep)
   end
   package.path = build(paths)
   package.cpath = build(cpaths)
end
"""


def runtime_separators(lua) -> Tuple[str, str]:
    """Return (directory separator, search-path separator) of the runtime."""
    lines = str(lua.eval("package.config")).split("\n")
    return lines[0], lines[1]


def lua_version(lua) -> str:
    # _VERSION is "Lua 5.4"
    return str(lua.eval("_VERSION")).split()[-1]


def define_bridge(lua) -> None:
    lua.execute(SET_SEARCH_PATHS_LUA)


def set_search_paths(lua, base: Path, paths: Sequence[str], cpaths: Sequence[str]) -> None:
    """Call the bridge routine with already expanded templates.

    Lua errors propagate as ``lupa.LuaError``.
    """
    bridge = lua.globals()[BRIDGE_NAME]
    log.debug(f"Search paths rooted at {base}: {len(paths)} module, {len(cpaths)} native templates")
    bridge(os.fsencode(str(base)), lua.table(*paths), lua.table(*cpaths))


def install_search_paths(lua, base: Path, paths: Sequence[str], cpaths: Sequence[str]) -> None:
    """Define the bridge and point both module searchers at ``base``.

    Templates may use ``{lua_version}`` and ``{ext}`` placeholders and ``/``
    as directory separator; they are expanded for the running runtime.
    """
    dirsep, _ = runtime_separators(lua)
    version = lua_version(lua)
    define_bridge(lua)
    set_search_paths(
        lua,
        base,
        [expand_template(t, version, dirsep) for t in paths],
        [expand_template(t, version, dirsep) for t in cpaths],
    )
