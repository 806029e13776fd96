"""Hooks invoked by the Deployer around a batch of commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .command.base import Command
    from .deployer import DeploymentContext

logger = logging.getLogger(__name__)


class DeployerListener:
    """Base listener; override only the hooks you need."""

    def before_commands_executed(self, context: "DeploymentContext") -> None:
        pass

    def before_command_executed(self, command: "Command", context: "DeploymentContext") -> None:
        pass

    def after_command_executed(self, command: "Command", context: "DeploymentContext") -> None:
        pass

    def after_commands_executed(self, context: "DeploymentContext") -> None:
        pass


class AddHostNameTokensListener(DeployerListener):
    """Adds ``mlHostName1..N`` custom tokens for every host in the cluster.

    Runs before any command so payloads can refer to hosts by position.
    """

    prefix = "mlHostName"

    def before_commands_executed(self, context: "DeploymentContext") -> None:
        app_config = context.app_config
        if not app_config.add_host_name_tokens:
            return
        host_names = context.command_context.get_host_names()
        for number, host_name in enumerate(host_names, start=1):
            app_config.custom_tokens[f"{self.prefix}{number}"] = host_name
        logger.info("Added %d host name token(s)", len(host_names))
