"""Shared scope-configuration and generation helpers for sigtable commands."""

from __future__ import annotations

import click

from sigtable.config import load_scope_config
from sigtable.group import GeneratedTables, generate_tables

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON scope configuration (default: built-in standard-library scopes)",
)


def build_tables(config_path: str | None) -> GeneratedTables:
    """Load the configured scopes and run the full generation pipeline.

    Everything is computed in memory; nothing is written unless the whole
    run succeeds.
    """
    return generate_tables(load_scope_config(config_path))
