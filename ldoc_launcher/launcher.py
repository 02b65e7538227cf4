"""LDoc launcher entry point.

Steps, in order:
- resolve this executable and derive the install root (``<root>/bin/<exe>``)
- create a Lua runtime and publish ``arg``
- point ``package.path``/``package.cpath`` at the install root (soft failure)
- load, compile and run the payload script (file or embedded)

Every failure is reported once on stderr as ``<app>: <category>: <details>``.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, List, Optional, Sequence

from lupa import LuaError

from ldoc_launcher.bridge import install_search_paths
from ldoc_launcher.config import LauncherConfig, load_launcher_config
from ldoc_launcher.errors import ConfigError, LauncherError, SearchPathError
from ldoc_launcher.paths import ExecutableResolver, executable_path, install_root
from ldoc_launcher.payload import Payload, embedded_payload, read_script_payload, run_payload
from ldoc_launcher.runtime import LuaSession

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def report(error: LauncherError, app_name: str) -> None:
    print(error.diagnostic(app_name), file=sys.stderr)


def _load_payload(config: LauncherConfig, root) -> Payload:
    if config.embedded:
        return embedded_payload(config.script_name)
    return read_script_payload(root, config.script_name)


def run(
    argv: Sequence[str],
    config: Optional[LauncherConfig] = None,
    exe_resolver: Optional[ExecutableResolver] = None,
    session_factory: Callable[[], LuaSession] = LuaSession,
) -> int:
    """Run the payload with ``argv`` and return the process exit status."""
    config = config or LauncherConfig()
    app_name = config.app_name

    try:
        exe = executable_path(argv, exe_resolver)
        session = session_factory()
    except LauncherError as e:
        report(e, app_name)
        return EXIT_FAILURE

    root = install_root(exe)
    log.debug(f"Install root: {root}")

    with session:
        session.publish_argv(argv)
        try:
            install_search_paths(session.lua, root, config.lua_paths, config.lua_cpaths)
        except LuaError as e:
            # package.path/cpath keep the runtime defaults
            report(SearchPathError(str(e)), app_name)

        try:
            run_payload(session.lua, _load_payload(config, root))
        except LauncherError as e:
            report(e, app_name)
            return EXIT_FAILURE

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> None:
    argv = list(sys.argv if argv is None else argv)
    try:
        config = load_launcher_config()
    except (AssertionError, OSError, ValueError) as e:
        report(ConfigError(str(e)), LauncherConfig().app_name)
        sys.exit(EXIT_FAILURE)

    logging.basicConfig(
        level=logging.getLevelName(config.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    sys.exit(run(argv, config))


if __name__ == "__main__":
    main()
