"""Verify that a generated artifact is up to date."""

from __future__ import annotations

import difflib
from pathlib import Path

import click

from sigtable.commands.resolve import build_tables, config_option
from sigtable.exit_codes import StaleTableError
from sigtable.output.emit import FORMATS, render
from sigtable.output.formatter import json_envelope, to_json


@click.command()
@click.argument("artifact", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(FORMATS), default="python", show_default=True,
              help="Format the artifact was generated in")
@config_option
@click.pass_context
def check(ctx, artifact, fmt, config_path):
    """Regenerate in memory and compare with ARTIFACT byte for byte.

    Exits 5 when the artifact is stale, so CI can ask for a regeneration.
    """
    json_mode = ctx.obj.get("json") if ctx.obj else False
    fresh = render(build_tables(config_path), fmt)
    current = Path(artifact).read_text(encoding="utf-8")
    up_to_date = fresh == current

    diff = []
    if not up_to_date:
        diff = list(difflib.unified_diff(
            current.splitlines(), fresh.splitlines(),
            fromfile=artifact, tofile="regenerated", lineterm="",
        ))

    if json_mode:
        click.echo(to_json(json_envelope(
            "check",
            summary={"up_to_date": up_to_date, "changed_lines": len(diff)},
            artifact=artifact,
            diff=diff,
        )))
    elif up_to_date:
        click.echo(f"{artifact}: up to date")
    else:
        click.echo("\n".join(diff))

    if not up_to_date:
        raise StaleTableError(f"{artifact} is stale. Run `sigtable generate -o {artifact}`.")
