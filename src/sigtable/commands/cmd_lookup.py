"""Resolve one signature to its declaration."""

from __future__ import annotations

import click

from sigtable.commands.resolve import build_tables, config_option
from sigtable.exit_codes import EXIT_ERROR, SigtableError
from sigtable.output.formatter import json_envelope, to_json


@click.command()
@click.argument("signature")
@config_option
@click.pass_context
def lookup(ctx, signature, config_path):
    """Print the qualified name owning SIGNATURE.

    SIGNATURE uses the canonical form found in generated tables, e.g.
    ``__len__() -> int`` or ``(str) -> None``.
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    tables = build_tables(config_path)
    kind, qname = None, None
    for table_kind, pairs in (("iface", tables.ifaces), ("func", tables.funcs)):
        for sig, name in pairs:
            if sig == signature:
                kind, qname = table_kind, name
                break
        if qname:
            break

    if json_mode:
        click.echo(to_json(json_envelope(
            "lookup",
            summary={"found": qname is not None},
            signature=signature,
            kind=kind,
            name=qname,
        )))
        if qname is None:
            ctx.exit(EXIT_ERROR)
        return

    if qname is None:
        raise SigtableError(f"no declaration has signature {signature!r}")
    click.echo(f"{kind}  {qname}")
