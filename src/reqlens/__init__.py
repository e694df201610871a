"""reqlens - interactive HTTP request timing and response breakdown tool."""

__version__ = "0.3.0"
