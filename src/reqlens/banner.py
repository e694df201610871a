"""ASCII banner for reqlens CLI."""

from rich.console import Console

BANNER = r"""
   ________  ____ _/ /__  ____  _____
  / ___/ _ \/ __ `/ / _ \/ __ \/ ___/
 / /  /  __/ /_/ / /  __/ / / (__  )
/_/   \___/\__, /_/\___/_/ /_/____/
             /_/
"""


def print_banner(console: Console | None = None, show_version: bool = True) -> None:
    """Print the reqlens ASCII banner."""
    if console is None:
        console = Console()

    console.print(f"[bold cyan]{BANNER}[/bold cyan]", highlight=False)

    if show_version:
        from reqlens import __version__

        console.print(f"  [dim]v{__version__} - Interactive HTTP client with timing breakdown[/dim]")
        console.print()
