"""Default command set for an app config."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .base import Command
from .databases import DeployDatabaseCommand
from .forests import DeployForestsCommand
from .resource import SubmitCombinedRequestCommand

if TYPE_CHECKING:
    from ..config import AppConfig


def build_commands(app_config: "AppConfig") -> List[Command]:
    commands: List[Command] = []
    if app_config.databases:
        commands.append(DeployDatabaseCommand([db.payload for db in app_config.databases]))
    for database in app_config.databases:
        commands.append(DeployForestsCommand(database))
    if app_config.combine_requests:
        commands.append(SubmitCombinedRequestCommand())
    return commands
