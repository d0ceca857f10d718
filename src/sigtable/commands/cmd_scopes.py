"""Show the configured scopes in resolution order."""

from __future__ import annotations

import click

from sigtable.commands.resolve import config_option
from sigtable.config import load_scope_config
from sigtable.output.formatter import format_table, json_envelope, to_json
from sigtable.scopes import order_scopes


@click.command()
@config_option
@click.pass_context
def scopes(ctx, config_path):
    """List scopes in priority order (shortest path first).

    Earlier scopes win when two scopes expose the same shape.  Private
    scopes are listed but never scanned.
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    ordered = order_scopes(load_scope_config(config_path))

    if json_mode:
        click.echo(to_json(json_envelope(
            "scopes",
            summary={
                "scopes": len(ordered),
                "private": sum(1 for s in ordered if s.private),
            },
            scopes=[{"rank": i, "path": s.path, "private": s.private}
                    for i, s in enumerate(ordered, 1)],
        )))
        return

    rows = [[str(i), s.path or "(universe)", "private" if s.private else ""]
            for i, s in enumerate(ordered, 1)]
    click.echo(format_table(["#", "Scope", "Visibility"], rows))
