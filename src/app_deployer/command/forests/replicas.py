"""Replica placement strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, List

from .models import Forest, ForestReplica, resolve_fast_and_large_directories

if TYPE_CHECKING:
    from ...config import AppConfig
    from .naming import ForestNamingStrategy
    from .plan import ForestPlan


class ReplicaBuilderStrategy(ABC):
    @abstractmethod
    def build_replicas(
        self,
        forests: List[Forest],
        forest_plan: "ForestPlan",
        app_config: "AppConfig",
        replica_data_directories: List[str],
        naming_strategy: "ForestNamingStrategy",
    ) -> None:
        """Attach ``forest_plan.replica_count`` replicas to each forest in place."""
        pass

    def _new_replica(
        self,
        forest: Forest,
        replica_number: int,
        host: str,
        data_directory: str,
        forest_plan: "ForestPlan",
        app_config: "AppConfig",
        naming_strategy: "ForestNamingStrategy",
    ) -> ForestReplica:
        database_name = forest_plan.database_name
        fast, large = resolve_fast_and_large_directories(database_name, app_config.forests)
        return ForestReplica(
            replica_name=naming_strategy.get_replica_name(
                database_name, forest.forest_name, replica_number, app_config
            ),
            host=host,
            data_directory=data_directory if data_directory and data_directory.strip() else None,
            fast_data_directory=fast,
            large_data_directory=large,
        )


def _forests_by_host(forests: List[Forest]) -> Dict[str, List[Forest]]:
    grouped: Dict[str, List[Forest]] = {}
    for forest in forests:
        grouped.setdefault(forest.host, []).append(forest)
    return grouped


class DistributedReplicaBuilderStrategy(ReplicaBuilderStrategy):
    """Spreads the replicas of each host's forests across every other host.

    For a primary host, candidate hosts are the ones after it in plan order,
    wrapping around and skipping the primary. A pointer walks that list as
    replicas are assigned, so consecutive forests on the same host put their
    replicas on different hosts. Replica data directories are cycled per forest.
    """

    def build_replicas(
        self,
        forests: List[Forest],
        forest_plan: "ForestPlan",
        app_config: "AppConfig",
        replica_data_directories: List[str],
        naming_strategy: "ForestNamingStrategy",
    ) -> None:
        host_names = forest_plan.host_names
        directories = replica_data_directories or [""]

        for primary_host, host_forests in _forests_by_host(forests).items():
            index = host_names.index(primary_host)
            candidates = host_names[index + 1:] + host_names[:index]
            host_pointer = 0

            for forest_index, forest in enumerate(host_forests):
                data_directory = directories[forest_index % len(directories)]
                replicas = []
                for replica_number in range(1, forest_plan.replica_count + 1):
                    host = candidates[host_pointer % len(candidates)]
                    host_pointer += 1
                    replicas.append(
                        self._new_replica(
                            forest, replica_number, host, data_directory,
                            forest_plan, app_config, naming_strategy,
                        )
                    )
                forest.forest_replicas = replicas


class GroupedReplicaBuilderStrategy(ReplicaBuilderStrategy):
    """Replica ``i`` of a forest on host ``k`` goes to host ``(k + i) mod n``.

    Every forest on a host shares the same replica hosts, which keeps failover
    pairs predictable.
    """

    def build_replicas(
        self,
        forests: List[Forest],
        forest_plan: "ForestPlan",
        app_config: "AppConfig",
        replica_data_directories: List[str],
        naming_strategy: "ForestNamingStrategy",
    ) -> None:
        host_names = forest_plan.host_names
        directories = replica_data_directories or [""]

        for host_forests in _forests_by_host(forests).values():
            for forest_index, forest in enumerate(host_forests):
                index = host_names.index(forest.host)
                data_directory = directories[forest_index % len(directories)]
                forest.forest_replicas = [
                    self._new_replica(
                        forest,
                        replica_number,
                        host_names[(index + replica_number) % len(host_names)],
                        data_directory,
                        forest_plan,
                        app_config,
                        naming_strategy,
                    )
                    for replica_number in range(1, forest_plan.replica_count + 1)
                ]
