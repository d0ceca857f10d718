"""Generate the signature lookup table artifact."""

from __future__ import annotations

import click

from sigtable.commands.resolve import build_tables, config_option
from sigtable.output.emit import FORMATS, render, write_artifact


@click.command()
@click.option("-o", "--output", "output_path", type=click.Path(), default=None,
              help="Output file (default: stdout)")
@click.option("--format", "fmt", type=click.Choice(FORMATS), default="python", show_default=True,
              help="Artifact format")
@config_option
def generate(output_path, fmt, config_path):
    """Scan every configured scope and emit the signature tables.

    The artifact lists all scopes, then the interface table, then the
    function table, each in scope order.  Output is identical across runs
    with the same scopes and library versions.
    """
    text = render(build_tables(config_path), fmt)
    if output_path:
        write_artifact(text, output_path)
    else:
        click.echo(text, nl=False)
