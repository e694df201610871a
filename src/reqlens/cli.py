"""reqlens CLI entry point."""

import logging

import click
from rich.console import Console

from .commands import config, quick, start, version

console = Console()


def setup_logging(verbose: bool) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", "-c", default=None, help="Config file path (reqlens.yaml)")
@click.pass_context
def main(ctx, verbose, config):
    """reqlens - Interactive HTTP client with timing breakdown.

    Sends a request and shows where the time went: DNS, TCP, TLS,
    server wait and download, plus a quick analysis of the response.
    Runs interactive mode when no command is given.
    """
    setup_logging(verbose)

    if ctx.invoked_subcommand is not None:
        return

    from .banner import print_banner
    from .config import load_config
    from .interactive import run_interactive_mode

    print_banner(console)
    run_interactive_mode(load_config(config), console)


main.add_command(start)
main.add_command(quick)
main.add_command(config)
main.add_command(version)


if __name__ == "__main__":
    main()
