"""app-deployer public API."""

from __future__ import annotations

from .command import (
    Command,
    CommandContext,
    Configuration,
    Configurations,
    CustomCommand,
    DeployDatabaseCommand,
    ResourceCommand,
    SubmitCombinedRequestCommand,
    UndoableCommand,
    build_commands,
)
from .command.forests import (
    DefaultForestNamingStrategy,
    DeployForestsCommand,
    DistributedReplicaBuilderStrategy,
    Forest,
    ForestBuilder,
    ForestNamingStrategy,
    ForestPlan,
    ForestReplica,
    GroupedReplicaBuilderStrategy,
    ReplicaBuilderStrategy,
)
from .config import AppConfig, DatabaseConfig, ForestConfig, ManageConfig, load_config
from .deployer import Deployer, DeploymentContext, DeploymentResult
from .errors import (
    CommandExecutionError,
    ConfigurationError,
    DeployerError,
    HostDiscoveryError,
    ManageApiError,
    TransientHostDiscoveryError,
    TransientManageError,
)
from .listeners import AddHostNameTokensListener, DeployerListener
from .workflow import DeploymentWorkflow

__all__ = [
    # Orchestration
    "Deployer",
    "DeploymentContext",
    "DeploymentResult",
    "DeploymentWorkflow",
    "DeployerListener",
    "AddHostNameTokensListener",
    # Commands
    "Command",
    "UndoableCommand",
    "CustomCommand",
    "CommandContext",
    "Configuration",
    "Configurations",
    "ResourceCommand",
    "SubmitCombinedRequestCommand",
    "DeployDatabaseCommand",
    "DeployForestsCommand",
    "build_commands",
    # Forest planning
    "ForestBuilder",
    "ForestPlan",
    "Forest",
    "ForestReplica",
    "ForestNamingStrategy",
    "DefaultForestNamingStrategy",
    "ReplicaBuilderStrategy",
    "DistributedReplicaBuilderStrategy",
    "GroupedReplicaBuilderStrategy",
    # Config
    "AppConfig",
    "ManageConfig",
    "ForestConfig",
    "DatabaseConfig",
    "load_config",
    # Errors
    "DeployerError",
    "ConfigurationError",
    "ManageApiError",
    "TransientManageError",
    "HostDiscoveryError",
    "TransientHostDiscoveryError",
    "CommandExecutionError",
]
