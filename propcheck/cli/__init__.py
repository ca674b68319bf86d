"""propcheck CLI - check properties and sample generators from the shell."""

from propcheck.cli.commands import cli


def main() -> None:
    """Main entry point for the propcheck CLI."""
    cli()


__all__ = ["main", "cli"]
