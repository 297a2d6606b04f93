"""Command-line interface for gitlab-mcp."""

from .commands.server import app


def main():
    """Console script entry point."""
    app()


__all__ = ["app", "main"]
