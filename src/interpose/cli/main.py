"""interpose CLI."""

import click

from interpose.cli.config import config_group
from interpose.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="interpose")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """interpose - method and attribute interception for Python classes."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(config_group, name="config")


if __name__ == "__main__":
    cli()
