"""
fixguard Command-Line Interface.

Provides CLI commands for inspecting conflict resolution on fix batches.
"""

from fixguard.cli.main import app

__all__ = [
    "app",
]
