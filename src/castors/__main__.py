from castors.cli import cli

cli()
