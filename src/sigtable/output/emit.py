"""Rendering of generated tables into their output artifacts.

Two formats are supported:

``python``
    An importable module with ``SCOPES`` (tuple), ``IFACES`` and ``FUNCS``
    (dicts in grouped order; dict literals keep insertion order).
``json``
    The same collections as a JSON document, pairs as two-element lists so
    row order survives key sorting.

String literals are written with :func:`json.dumps`, which is also valid
Python literal syntax and never depends on ``repr`` quoting choices.
"""

from __future__ import annotations

import json
from pathlib import Path

from sigtable.exit_codes import SerializationError
from sigtable.group import GeneratedTables
from sigtable.output.formatter import to_json

FORMATS = ("python", "json")

HEADER = "# Code generated by sigtable generate. DO NOT EDIT.\n"


def _lit(s: str) -> str:
    return json.dumps(s)


def render_python(tables: GeneratedTables) -> str:
    lines = [HEADER, "SCOPES = ("]
    lines.extend(f"    {_lit(path)}," for path in tables.scopes)
    lines.append(")")
    for name, pairs in (("IFACES", tables.ifaces), ("FUNCS", tables.funcs)):
        lines.append("")
        lines.append(f"{name} = {{")
        lines.extend(f"    {_lit(sig)}: {_lit(qname)}," for sig, qname in pairs)
        lines.append("}")
    return "\n".join(lines) + "\n"


def render_json(tables: GeneratedTables) -> str:
    data = {
        "scopes": list(tables.scopes),
        "ifaces": [list(p) for p in tables.ifaces],
        "funcs": [list(p) for p in tables.funcs],
    }
    return to_json(data) + "\n"


def render(tables: GeneratedTables, fmt: str = "python") -> str:
    if fmt == "python":
        return render_python(tables)
    if fmt == "json":
        return render_json(tables)
    raise ValueError(f"unknown output format: {fmt!r}")


def write_artifact(text: str, path: str | Path) -> None:
    """Write a fully rendered artifact to *path*.

    Raises :class:`SerializationError` when the destination is unwritable.
    """
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise SerializationError(f"cannot write {path}: {exc}") from exc
