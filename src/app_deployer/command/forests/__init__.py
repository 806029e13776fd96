"""Forest planning and deployment."""

from .builder import ForestBuilder
from .command import DeployForestsCommand
from .models import Forest, ForestReplica, try_parse_template
from .naming import DefaultForestNamingStrategy, ForestNamingStrategy
from .plan import ForestPlan
from .replicas import (
    DistributedReplicaBuilderStrategy,
    GroupedReplicaBuilderStrategy,
    ReplicaBuilderStrategy,
)

__all__ = [
    "ForestBuilder",
    "DeployForestsCommand",
    "Forest",
    "ForestReplica",
    "try_parse_template",
    "ForestPlan",
    "ForestNamingStrategy",
    "DefaultForestNamingStrategy",
    "ReplicaBuilderStrategy",
    "DistributedReplicaBuilderStrategy",
    "GroupedReplicaBuilderStrategy",
]
