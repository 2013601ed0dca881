"""CLI command implementations for the stickersheet application.

This package contains subcommands for the stickersheet CLI, including:
- validate: Audit a sheet document against the placement invariants
"""

from stickersheet.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
