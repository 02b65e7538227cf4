"""Executable location and install-root derivation.

The launcher is installed as ``<root>/bin/<exe>``. When bundled into a frozen
executable ``sys.executable`` is the launcher itself; otherwise the console
script named by ``argv[0]`` is.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from ldoc_launcher.errors import ExecutablePathError

log = logging.getLogger(__name__)

ExecutableResolver = Callable[[Sequence[str]], Optional[Path]]


def resolve_executable(argv: Sequence[str]) -> Optional[Path]:
    """Return the absolute path of the running launcher, or None."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).absolute() if sys.executable else None
    if not argv or not argv[0]:
        return None
    argv0 = argv[0]
    if os.sep not in argv0 and (os.altsep is None or os.altsep not in argv0):
        found = shutil.which(argv0)
        if found:
            argv0 = found
    # Windows console-script wrappers strip ".exe" from argv[0]; existence is not checked.
    return Path(argv0).absolute()


def executable_path(argv: Sequence[str], resolver: Optional[ExecutableResolver] = None) -> Path:
    exe = (resolver or resolve_executable)(argv)
    if exe is None:
        raise ExecutablePathError()
    log.debug(f"Launcher executable: {exe}")
    return exe


def install_root(exe: Path) -> Path:
    """Strip ``bin/<exe>`` from the executable path. The result is not validated."""
    return exe.parent.parent
