"""Entry point for the FlowMate CLI.

Usage:
    python -m flowmate.interfaces.cli.main

Or via installed entry point:
    flowmate <command>
"""

from flowmate.interfaces.cli import app


def main() -> None:
    """Run the FlowMate CLI application."""
    app()


if __name__ == "__main__":
    main()
