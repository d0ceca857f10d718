"""Grouping and ordering of resolved tables, plus the generation pipeline."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass

from sigtable.extract.scope import load_scope
from sigtable.resolve import resolve
from sigtable.scopes import as_scopes, ordered_paths, owner_path, scope_sort_key

Pair = tuple[str, str]


def group(table: dict[str, str], scope_order: list[str]) -> list[Pair]:
    """Order *table* for emission.

    Entries are grouped by owning scope; groups follow the scope ordering
    and entries inside a group are sorted by qualified name.  Raises
    ValueError for an entry whose owner is not in *scope_order*.
    """
    known = set(scope_order)
    by_scope: dict[str, list[str]] = defaultdict(list)
    sig_of: dict[str, str] = {}
    for sig, qname in table.items():
        path = owner_path(qname)
        if path not in known:
            raise ValueError(f"{qname!r} does not belong to any known scope")
        by_scope[path].append(qname)
        sig_of[qname] = sig

    result: list[Pair] = []
    for path in sorted(known, key=scope_sort_key):
        for qname in sorted(by_scope.get(path, ())):
            result.append((sig_of[qname], qname))
    return result


@dataclass(frozen=True)
class GeneratedTables:
    """The three collections written to the generated artifact."""

    scopes: tuple[str, ...]
    ifaces: tuple[Pair, ...]
    funcs: tuple[Pair, ...]


def generate_tables(scopes, loader=load_scope) -> GeneratedTables:
    """Run the whole pipeline: resolve every scope, then group both tables."""
    scopes = as_scopes(scopes)
    order = ordered_paths(scopes)
    tables = resolve(scopes, loader)
    return GeneratedTables(
        scopes=tuple(order),
        ifaces=tuple(group(tables.ifaces, order)),
        funcs=tuple(group(tables.funcs, order)),
    )
