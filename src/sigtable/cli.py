"""Click CLI entry point with lazy-loaded subcommands."""

import logging

import click

# Lazy-loading command group: imports command modules only when invoked.
_COMMANDS = {
    "generate": ("sigtable.commands.cmd_generate", "generate"),
    "check":    ("sigtable.commands.cmd_check",    "check"),
    "scopes":   ("sigtable.commands.cmd_scopes",   "scopes"),
    "lookup":   ("sigtable.commands.cmd_lookup",   "lookup"),
}


class LazyGroup(click.Group):
    """A Click group that lazy-loads command modules on first access."""

    def list_commands(self, ctx):
        return sorted(_COMMANDS.keys())

    def get_command(self, ctx, cmd_name):
        if cmd_name not in _COMMANDS:
            return None
        module_path, attr_name = _COMMANDS[cmd_name]
        import importlib
        mod = importlib.import_module(module_path)
        return getattr(mod, attr_name)


def _configure_logging(verbose: bool) -> None:
    # stderr only: generated artifacts may go to stdout
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        force=verbose,
    )
    logging.getLogger().setLevel(level)


@click.group(cls=LazyGroup)
@click.version_option(package_name="sigtable")
@click.option('--json', 'json_mode', is_flag=True, help='Output in JSON format')
@click.option('-v', '--verbose', is_flag=True, help='Log per-scope progress to stderr')
@click.pass_context
def cli(ctx, json_mode, verbose):
    """sigtable: canonical signature lookup table generator."""
    ctx.ensure_object(dict)
    ctx.obj['json'] = json_mode
    _configure_logging(verbose)
