"""Commands and the context they run in."""

from . import sort_order
from .base import Command, CustomCommand, UndoableCommand
from .configuration import Configuration, Configurations
from .context import CommandContext
from .databases import DeployDatabaseCommand
from .registry import build_commands
from .resource import ResourceCommand, SubmitCombinedRequestCommand

__all__ = [
    "sort_order",
    "Command",
    "UndoableCommand",
    "CustomCommand",
    "Configuration",
    "Configurations",
    "CommandContext",
    "ResourceCommand",
    "SubmitCombinedRequestCommand",
    "DeployDatabaseCommand",
    "build_commands",
]
