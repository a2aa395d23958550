"""Named command registry over the structural operations."""

from .models import CommandRef
from .registry import CommandConflictError, CommandRegistry, RegistryStats
from .defaults import DEFAULT_COMMANDS, load_default_commands

__all__ = [
    "CommandRef",
    "CommandRegistry",
    "CommandConflictError",
    "RegistryStats",
    "DEFAULT_COMMANDS",
    "load_default_commands",
]
