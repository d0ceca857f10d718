from sigtable.cli import cli

cli()
