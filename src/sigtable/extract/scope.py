"""Scope loading and per-scope signature extraction."""

from __future__ import annotations

import builtins
import importlib
import logging
from dataclasses import dataclass, field

from sigtable.exit_codes import ScopeResolutionError
from sigtable.extract.canonical import (
    callable_alias,
    function_signature,
    interface_signature,
    is_callback_protocol,
)
from sigtable.scopes import UNIVERSE

log = logging.getLogger(__name__)

IFACE = "iface"
FUNC = "func"


@dataclass
class ScopeSignatures:
    """Local signature maps of one scope: signature -> declaration name."""

    ifaces: dict[str, str] = field(default_factory=dict)
    funcs: dict[str, str] = field(default_factory=dict)


def load_scope(path: str):
    """Import the module behind *path*; the universal scope is ``builtins``.

    Raises :class:`ScopeResolutionError` when the module cannot be imported.
    """
    if path == UNIVERSE:
        return builtins
    try:
        return importlib.import_module(path)
    except Exception as exc:
        raise ScopeResolutionError(path, f"{type(exc).__name__}: {exc}") from exc


def exported_names(module, include_all: bool = False) -> list[str]:
    """Names a scope exports, sorted.

    ``__all__`` is authoritative when present.  Otherwise public names count
    only when the object was defined in *module*, so imported classes are
    not re-attributed to the importer.
    """
    if include_all:
        return sorted(vars(module))
    declared = getattr(module, "__all__", None)
    if declared is not None:
        return sorted({name for name in declared if hasattr(module, name)})
    names = []
    for name, obj in vars(module).items():
        if name.startswith("_"):
            continue
        if isinstance(obj, type) and obj.__module__ != module.__name__:
            continue
        names.append(name)
    return sorted(names)


def classify(obj) -> str | None:
    """``IFACE``, ``FUNC`` or None for declarations without a usable shape."""
    if callable_alias(obj) is not None or is_callback_protocol(obj):
        return FUNC
    if isinstance(obj, type) and interface_signature(obj):
        return IFACE
    return None


def extract_module(module, include_all: bool = False) -> ScopeSignatures:
    """Collect interface and function signatures declared by *module*.

    When two names in one scope share a shape, the alphabetically first
    name is kept so the result does not depend on namespace order.
    """
    out = ScopeSignatures()
    for name in exported_names(module, include_all):
        obj = getattr(module, name)
        kind = classify(obj)
        if kind == IFACE:
            out.ifaces.setdefault(interface_signature(obj), name)
        elif kind == FUNC:
            out.funcs.setdefault(function_signature(obj), name)
    return out


def extract(scope, loader=load_scope) -> ScopeSignatures:
    """Extract the local signature maps of *scope*.

    *loader* maps a scope path to a module object; it defaults to importing.
    The universal scope is scanned in include-all mode.
    """
    module = loader(scope.path)
    sigs = extract_module(module, include_all=scope.is_universe)
    log.debug(
        "scope %r: %d interfaces, %d functions",
        scope.path,
        len(sigs.ifaces),
        len(sigs.funcs),
    )
    return sigs
