"""Priority resolution: merge per-scope signatures, first writer wins."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sigtable.extract.scope import extract, load_scope
from sigtable.scopes import order_scopes, qualified_name

log = logging.getLogger(__name__)


@dataclass
class SignatureTables:
    """Global signature tables: signature -> qualified name."""

    ifaces: dict[str, str] = field(default_factory=dict)
    funcs: dict[str, str] = field(default_factory=dict)


def _merge(table: dict[str, str], local: dict[str, str], path: str) -> int:
    added = 0
    for sig in sorted(local):
        qname = qualified_name(path, local[sig])
        winner = table.get(sig)
        if winner is not None:
            log.debug("dropping %s: shape already owned by %s", qname, winner)
            continue
        table[sig] = qname
        added += 1
    return added


def resolve(scopes, loader=load_scope) -> SignatureTables:
    """Build the global tables from *scopes*.

    Scopes are processed in scope order (shortest path first, lexical
    tie-break); private scopes are skipped.  A signature already present is
    never overwritten, so the earliest scope exposing a shape owns it.  The
    first scope that fails to load aborts the run.
    """
    tables = SignatureTables()
    for scope in order_scopes(scopes):
        if scope.private:
            log.debug("skipping private scope %r", scope.path)
            continue
        local = extract(scope, loader)
        n_ifaces = _merge(tables.ifaces, local.ifaces, scope.path)
        n_funcs = _merge(tables.funcs, local.funcs, scope.path)
        log.info(
            "scope %r contributed %d interfaces, %d functions",
            scope.path,
            n_ifaces,
            n_funcs,
        )
    return tables
