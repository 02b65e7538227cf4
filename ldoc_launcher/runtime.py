"""Scoped Lua runtime session.

One session per launcher run. ``close()`` runs a full collection so payload
finalizers (open files, ``__gc`` handlers) execute before the runtime is
dropped.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional, Sequence

from lupa import LuaRuntime

from ldoc_launcher.errors import RuntimeCreationError

log = logging.getLogger(__name__)

RuntimeFactory = Callable[[], LuaRuntime]


def new_runtime() -> LuaRuntime:
    """Plain Lua state: standard libraries only, no Python bridge."""
    return LuaRuntime(register_eval=False, register_builtins=False)


class LuaSession:
    """Owns a ``LuaRuntime`` with the standard libraries opened."""

    def __init__(self, factory: Optional[RuntimeFactory] = None):
        try:
            self._lua = (factory or new_runtime)()
        except Exception as e:
            raise RuntimeCreationError(str(e)) from e
        if self._lua is None:
            raise RuntimeCreationError()
        self._lua.globals()["python"] = None
        self.closed = False
        log.debug("Lua runtime created")

    @property
    def lua(self) -> LuaRuntime:
        if self._lua is None:
            raise RuntimeError("Lua session is closed")
        return self._lua

    def publish_argv(self, argv: Sequence[str]) -> None:
        """Expose argv as the zero-indexed global ``arg`` table, raw OS bytes per element."""
        table = self.lua.table()
        for i, value in enumerate(argv):
            table[i] = os.fsencode(value)
        self.lua.globals()["arg"] = table

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._lua.execute("collectgarbage('collect')")
        finally:
            self._lua = None
            self.closed = True
            log.debug("Lua runtime released")

    def __enter__(self) -> "LuaSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
