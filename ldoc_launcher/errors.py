"""Launcher failure categories.

Every class carries the label printed on stderr as
``<app>: <category>: <details>``.
"""

from __future__ import annotations


class LauncherError(RuntimeError):
    """Base error for all launcher failures."""

    category = "Launcher error"
    def __init__(self, details: str = ""):
        super().__init__(details)
        self.details = details

    def diagnostic(self, app_name: str) -> str:
        if self.details:
            return f"{app_name}: {self.category}: {self.details}"
        return f"{app_name}: {self.category}"


class ConfigError(LauncherError):
    category = "Invalid configuration"


class ExecutablePathError(LauncherError):
    category = "Could not find executable path"


class RuntimeCreationError(LauncherError):
    category = "Failed to create Lua state"


class SearchPathError(LauncherError):
    """Bridge invocation failed; the runtime keeps its default search paths."""

    category = "Error setting paths"


class PayloadLoadError(LauncherError):
    category = "Could not load script"


class PayloadSyntaxError(LauncherError):
    category = "Syntax error in loaded code"

    def __init__(self, details: str = "", origin: str = "file"):
        super().__init__(details)
        self.origin = origin
        if origin == "embedded":
            self.category = "Syntax error in embedded code"


class PayloadRuntimeError(LauncherError):
    category = "Runtime error"
