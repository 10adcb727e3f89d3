"""botdouble CLI - Command line interface for botdouble."""

from botdouble.cli.commands import cli


def main() -> None:
    """Main entry point for the botdouble CLI."""
    cli()


__all__ = ["main", "cli"]
