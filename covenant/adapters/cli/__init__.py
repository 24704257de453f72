"""Command-line interface adapter.

Provides management commands for driving a ledger by hand.
"""

from .commands import CLICommandHandler

__all__ = ["CLICommandHandler"]
