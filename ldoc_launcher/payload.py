"""Payload script loading, compilation and execution."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from lupa import LuaError

from ldoc_launcher.errors import PayloadLoadError, PayloadRuntimeError, PayloadSyntaxError

log = logging.getLogger(__name__)

EMBEDDED_PACKAGE = "ldoc_launcher"
EMBEDDED_DIR = "embedded"

_INTERPRETER_LINE = re.compile(rb"\A#![^\n]*")


@dataclass(frozen=True)
class Payload:
    name: str
    source: bytes
    origin: str = "file"

    @property
    def chunk_name(self) -> str:
        return f"@{self.name}"


def strip_interpreter_line(source: bytes) -> bytes:
    """Blank a leading ``#!`` line, keeping its newline so line numbers hold."""
    return _INTERPRETER_LINE.sub(b"", source, count=1)


def read_script_payload(install_root: Path, script_name: str) -> Payload:
    script_path = install_root / "bin" / script_name
    try:
        source = script_path.read_bytes()
    except OSError as e:
        raise PayloadLoadError(f"{script_path}: {e.strerror or e}") from e
    log.debug(f"Loaded payload from {script_path} ({len(source)} bytes)")
    return Payload(name=script_name, source=strip_interpreter_line(source), origin="file")


def embedded_payload(script_name: str) -> Payload:
    """Read the payload baked into the package at build time."""
    resource = resources.files(EMBEDDED_PACKAGE).joinpath(EMBEDDED_DIR).joinpath(script_name)
    try:
        source = resource.read_bytes()
    except OSError as e:
        raise PayloadLoadError(f"embedded {script_name} is missing from this build") from e
    log.debug(f"Loaded embedded payload {script_name} ({len(source)} bytes)")
    return Payload(name=script_name, source=strip_interpreter_line(source), origin="embedded")


def compile_payload(lua, payload: Payload):
    """Compile the payload into a Lua function without running it."""
    result = lua.globals().load(payload.source, payload.chunk_name)
    # load() returns the chunk alone, or (nil, message)
    if isinstance(result, tuple):
        chunk = result[0]
        message = result[1] if len(result) > 1 else ""
    else:
        chunk, message = result, ""
    if chunk is None:
        raise PayloadSyntaxError(str(message), origin=payload.origin)
    return chunk


def run_payload(lua, payload: Payload) -> None:
    chunk = compile_payload(lua, payload)
    log.debug(f"Running {payload.origin} payload {payload.name}")
    try:
        chunk()
    except LuaError as e:
        raise PayloadRuntimeError(str(e)) from e
