from outline_admin.cli import cli

cli()
