"""interpose config commands - inspect and scaffold configuration."""

import json
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax

from interpose.config.constants import PROJECT_CONFIG_FILENAME
from interpose.config.loader import load_config
from interpose.config.template import write_template
from interpose.core.errors import ConfigError

_console = Console()


@click.group()
def config_group() -> None:
    """Inspect or create interpose configuration."""


@config_group.command("show")
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show_command(path: Path, as_json: bool) -> None:
    """Print the effective configuration.

    PATH is the directory holding interpose.yaml (default: current directory).
    """
    try:
        config = load_config(path.resolve())
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    data = config.model_dump(mode="json")
    if as_json:
        click.echo(json.dumps(data, indent=2))
        return
    _console.print(Syntax(yaml.safe_dump(data, sort_keys=False), "yaml"))


@config_group.command("init")
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing interpose.yaml")
def init_command(path: Path, force: bool) -> None:
    """Write a commented interpose.yaml with the default settings."""
    target = path.resolve() / PROJECT_CONFIG_FILENAME
    if target.exists() and not force:
        raise click.ClickException(f"{target} already exists. Use --force to overwrite.")

    write_template(target)
    _console.print(f"[green]✓[/green] Wrote {target}")
