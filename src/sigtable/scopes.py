"""Scopes: addressable modules of declarations and their total ordering.

The scope ordering (shorter path first, lexical tie-break) decides both
which scope wins a signature collision and the order in which scopes are
emitted.  It is part of the public contract of the resolver.
"""

from __future__ import annotations

from dataclasses import dataclass

UNIVERSE = ""


@dataclass(frozen=True)
class Scope:
    """One module to scan.

    ``path`` is the dotted import path; the empty string is the universal
    scope (``builtins``).  ``private`` scopes are listed in the output but
    never extracted.
    """

    path: str
    private: bool = False

    @property
    def is_universe(self) -> bool:
        return self.path == UNIVERSE


def scope_sort_key(path: str) -> tuple[int, str]:
    """Total order over scope paths: by length, then lexically."""
    return (len(path), path)


def order_scopes(scopes) -> list[Scope]:
    """Return *scopes* sorted by the scope ordering."""
    return sorted(scopes, key=lambda s: scope_sort_key(s.path))


def ordered_paths(scopes) -> list[str]:
    return [s.path for s in order_scopes(scopes)]


def qualified_name(path: str, name: str) -> str:
    if path == UNIVERSE:
        return name
    return f"{path}.{name}"


def owner_path(qualified: str) -> str:
    """Scope path owning *qualified*; declaration names never contain dots."""
    path, _, _ = qualified.rpartition(".")
    return path


def as_scopes(entries) -> tuple[Scope, ...]:
    """Coerce a mix of paths and :class:`Scope` values into scopes."""
    out = []
    for entry in entries:
        if isinstance(entry, Scope):
            out.append(entry)
        else:
            out.append(Scope(str(entry)))
    return tuple(out)


# Standard-library scopes scanned when no configuration is given.  Private
# implementation modules are kept in the list (they appear in the emitted
# scope list) but flagged so they never contribute signatures.
DEFAULT_SCOPES: tuple[Scope, ...] = (
    Scope(UNIVERSE),
    Scope("abc"),
    Scope("ast"),
    Scope("asyncio"),
    Scope("collections.abc"),
    Scope("contextlib"),
    Scope("email.message"),
    Scope("importlib.abc"),
    Scope("io"),
    Scope("logging"),
    Scope("numbers"),
    Scope("os"),
    Scope("selectors"),
    Scope("typing"),
    Scope("_collections_abc", private=True),
    Scope("importlib._abc", private=True),
    Scope("importlib._bootstrap", private=True),
)
