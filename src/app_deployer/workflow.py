"""High-level wiring of config, Manage API client and Deployer."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .command.base import Command
from .command.context import CommandContext
from .command.registry import build_commands
from .config import AppConfig
from .deployer import Deployer, DeploymentResult
from .listeners import AddHostNameTokensListener, DeployerListener
from .mgmt.client import ManageClient
from .mgmt.hosts import DefaultHostNameProvider, HostNameProvider
from .utils.logging import get_logger

logger = get_logger(__name__)


def default_listeners() -> List[DeployerListener]:
    return [AddHostNameTokensListener()]


class DeploymentWorkflow:
    """Builds a fresh CommandContext per run and hands it to a Deployer."""

    def __init__(
        self,
        config: AppConfig,
        *,
        manage_client: Optional[ManageClient] = None,
        host_name_provider: Optional[HostNameProvider] = None,
        commands: Optional[Sequence[Command]] = None,
        listeners: Optional[Sequence[DeployerListener]] = None,
    ) -> None:
        self.config = config
        self.manage_client = manage_client or ManageClient(config.manage)
        self.host_name_provider = host_name_provider or DefaultHostNameProvider(self.manage_client)
        self.commands = list(commands) if commands is not None else build_commands(config)
        self.listeners = list(listeners) if listeners is not None else default_listeners()

    def new_context(self) -> CommandContext:
        return CommandContext(
            app_config=self.config,
            manage_client=self.manage_client,
            host_name_provider=self.host_name_provider,
        )

    def deploy(self) -> DeploymentResult:
        logger.info("Deploying to %s", self.config.manage.base_url)
        return Deployer(self.commands, self.listeners).deploy(self.new_context())

    def undeploy(self) -> DeploymentResult:
        logger.info("Undeploying from %s", self.config.manage.base_url)
        return Deployer(self.commands, self.listeners).undeploy(self.new_context())

    def host_names(self) -> List[str]:
        return self.new_context().get_host_names()
