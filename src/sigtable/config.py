"""Scope configuration: loading and validation.

A configuration file is JSON with a single ``scopes`` list.  Entries are
either a dotted module path or an object with ``path`` and an optional
``private`` flag::

    {
      "scopes": [
        "",
        "io",
        {"path": "importlib._bootstrap", "private": true}
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sigtable.exit_codes import ConfigError
from sigtable.scopes import DEFAULT_SCOPES, Scope


def load_scope_config(path: str | Path | None) -> tuple[Scope, ...]:
    """Read the scope list from *path*; the default scopes when None."""
    if path is None:
        return DEFAULT_SCOPES
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read scope config {config_path}: {exc}") from exc
    try:
        cfg = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {config_path}: {exc}") from exc
    return parse_scope_config(cfg)


def parse_scope_config(cfg: Any) -> tuple[Scope, ...]:
    """Validate a decoded configuration and return its scopes in file order."""
    if not isinstance(cfg, dict):
        raise ConfigError("scope config must be a JSON object")
    entries = cfg.get("scopes")
    if not isinstance(entries, list):
        raise ConfigError("scope config needs a 'scopes' list")

    scopes: list[Scope] = []
    seen: set[str] = set()
    for i, entry in enumerate(entries):
        scope = _parse_entry(entry, i)
        if scope.path in seen:
            raise ConfigError(f"scopes[{i}]: duplicate scope {scope.path!r}")
        seen.add(scope.path)
        scopes.append(scope)
    return tuple(scopes)


def _parse_entry(entry: Any, index: int) -> Scope:
    if isinstance(entry, str):
        return Scope(_check_path(entry, index))
    if not isinstance(entry, dict):
        raise ConfigError(f"scopes[{index}]: expected a string or an object")
    unknown = set(entry) - {"path", "private"}
    if unknown:
        raise ConfigError(f"scopes[{index}]: unknown keys {sorted(unknown)}")
    path = entry.get("path")
    if not isinstance(path, str):
        raise ConfigError(f"scopes[{index}]: 'path' must be a string")
    private = entry.get("private", False)
    if not isinstance(private, bool):
        raise ConfigError(f"scopes[{index}]: 'private' must be true or false")
    return Scope(_check_path(path, index), private)


def _check_path(path: str, index: int) -> str:
    if path and not all(part.isidentifier() for part in path.split(".")):
        raise ConfigError(f"scopes[{index}]: {path!r} is not a dotted module path")
    return path
