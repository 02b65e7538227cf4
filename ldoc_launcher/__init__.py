"""ldoc launcher: runs the LDoc Lua script inside an embedded Lua runtime."""

__version__ = "1.0.0"
