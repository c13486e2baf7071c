"""covimport CLI."""

import click

from covimport import __version__
from covimport.cli.run import import_command
from covimport.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="covimport")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """covimport - attach JaCoCo coverage reports to project source files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(import_command, name="import")


if __name__ == "__main__":
    cli()
