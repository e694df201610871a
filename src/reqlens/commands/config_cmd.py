"""reqlens config - manage reqlens.yaml."""

from __future__ import annotations

import sys
from dataclasses import asdict, fields
from io import StringIO
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.table import Table
from ruamel.yaml import YAML

from ..config import (
    CONFIG_SEARCH_PATHS,
    ConfigError,
    ReqlensConfig,
    find_config_path,
    get_default_config_yaml,
    load_config,
    save_config_value,
    validate_config,
)

console = Console()

DEFAULT_FILENAME = CONFIG_SEARCH_PATHS[0]


def _config_file(config_path: Optional[str]) -> Optional[Path]:
    """Explicit --config path, else the discovered one (may be None)."""
    return Path(config_path) if config_path else find_config_path()


def _format_value(value: Any) -> str:
    """YAML text for mappings, plain str() for scalars."""
    if isinstance(value, dict):
        if not value:
            return "{}"
        yaml = YAML()
        yaml.default_flow_style = False
        buf = StringIO()
        yaml.dump(value, buf)
        return buf.getvalue().rstrip()
    return str(value)


@click.group("config")
def config():
    """Manage reqlens settings (reqlens.yaml)."""


@config.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
@click.option("--filename", default=DEFAULT_FILENAME,
              help=f"File to create (default: {DEFAULT_FILENAME})")
def init(force, filename):
    """Write a commented default config to the current directory."""
    target = Path.cwd() / filename

    if target.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/yellow] {target}")
        console.print("[dim]Pass --force to replace it.[/dim]")
        return

    target.write_text(get_default_config_yaml(), encoding="utf-8")
    console.print(f"[green]Config file created:[/green] {target}")


@config.command()
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
def show(config_path):
    """Show every setting, marking the ones changed by the config file."""
    defaults = asdict(ReqlensConfig())
    effective = asdict(load_config(config_path))

    table = Table(show_header=True)
    table.add_column("Setting", style="yellow")
    table.add_column("Value")
    table.add_column("Source", style="dim")
    for f in fields(ReqlensConfig):
        value = effective[f.name]
        source = "default" if value == defaults[f.name] else "config file"
        table.add_row(f.name, _format_value(value), source)
    console.print(table)

    source_path = _config_file(config_path)
    if source_path is not None and source_path.exists():
        console.print(f"[dim]Loaded from {source_path.resolve()}[/dim]")
    else:
        console.print("[dim]No config file found (using defaults)[/dim]")


@config.command()
@click.argument("key")
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
def get(key, config_path):
    """Print one setting.

    Header values use a dotted key, e.g. default_headers.User-Agent
    """
    value: Any = asdict(load_config(config_path))
    for part in key.split(".", 1):
        if not isinstance(value, dict) or part not in value:
            console.print(f"[red]Unknown key:[/red] {key}")
            sys.exit(1)
        value = value[part]

    click.echo(_format_value(value))


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
def set_value(key, value, config_path):
    """Change one setting in the config file, keeping its comments.

    \b
    Examples:
        reqlens config set request_timeout 10
        reqlens config set default_headers.User-Agent my-agent
    """
    path = _config_file(config_path)
    if path is None or not path.exists():
        console.print("[red]No config file found.[/red]")
        console.print("[dim]Create one with 'reqlens config init'.[/dim]")
        sys.exit(1)

    try:
        save_config_value(path, key, value)
    except ConfigError as e:
        console.print(f"[red]Invalid value:[/red] {e}")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Cannot write {path}:[/red] {e}")
        sys.exit(1)

    console.print(f"[green]Set[/green] {key} = {value} [dim]({path})[/dim]")


@config.command()
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
def validate(config_path):
    """Check the config file for YAML errors, unknown keys and bad values."""
    path = _config_file(config_path)
    if path is None:
        console.print("[yellow]No config file found.[/yellow]")
        console.print("[dim]Create one with 'reqlens config init'.[/dim]")
        return
    if not path.exists():
        console.print(f"[red]Config file not found:[/red] {path}")
        sys.exit(1)

    errors = validate_config(path)
    if errors:
        console.print(f"[red]Config has {len(errors)} error(s):[/red] {path}")
        for err in errors:
            console.print(f"  [red]-[/red] {err}")
        sys.exit(1)

    console.print(f"[green]Config is valid:[/green] {path}")


@config.command()
def path():
    """Print the path of the config file in use."""
    found = find_config_path()
    if found is None:
        console.print("[dim]No config file found. Looked for: "
                      f"{', '.join(CONFIG_SEARCH_PATHS)}[/dim]")
        sys.exit(1)
    click.echo(str(found))
