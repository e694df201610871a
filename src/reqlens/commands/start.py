"""Start command - launch interactive mode."""

import click

from ..banner import print_banner
from ..config import load_config


@click.command("start")
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
def start(config_path):
    """Start the interactive HTTP client.

    Prompts for URL, method, query parameters, headers and body,
    sends the request and shows the timing breakdown.
    """
    from ..interactive import run_interactive_mode

    print_banner()
    run_interactive_mode(load_config(config_path))
