"""CLI command groups for FlowMate.

Each module provides a Typer app that is registered with the main app
using app.add_typer().

Command groups:
- board: Viewing, automation and seeding (show, automate, seed)
- data: Backups and cleanup (export, import, clear-tasks)
- rules: Automation rules (list, add, toggle, delete)
"""

from flowmate.interfaces.cli.commands import board, data, rules

__all__ = ["board", "data", "rules"]
