"""Forest placement planning.

ForestBuilder turns a ForestPlan into Forest objects in memory. It never talks
to the cluster; saving the result is up to the caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from ...errors import ConfigurationError
from .models import Forest, resolve_fast_and_large_directories, try_parse_template
from .naming import DefaultForestNamingStrategy, ForestNamingStrategy
from .plan import ForestPlan
from .replicas import DistributedReplicaBuilderStrategy, ReplicaBuilderStrategy

if TYPE_CHECKING:
    from ...config import AppConfig

logger = logging.getLogger(__name__)


class ForestBuilder:
    def __init__(
        self,
        forest_naming_strategy: Optional[ForestNamingStrategy] = None,
        replica_builder_strategy: Optional[ReplicaBuilderStrategy] = None,
    ) -> None:
        self.forest_naming_strategy = forest_naming_strategy or DefaultForestNamingStrategy()
        self.replica_builder_strategy = replica_builder_strategy or DistributedReplicaBuilderStrategy()

    def build_forests(self, forest_plan: ForestPlan, app_config: "AppConfig") -> List[Forest]:
        """
        Build forests for `forest_plan`, plus replicas when its replica count is positive.

        A forest count for the database in ``app_config.forests.forest_counts``
        overrides the plan's forests per data directory. Numbering continues
        after the forests the plan marks as existing, so raising the count and
        planning again yields only the new forests.
        """
        forest_plan.validate()
        database_name = forest_plan.database_name
        host_names = forest_plan.host_names

        data_directories = self.determine_data_directories(database_name, app_config)
        forests_per_data_directory = self.determine_forests_per_data_directory(forest_plan, app_config)
        existing = forest_plan.existing_forests_per_data_directory

        number_to_build = len(host_names) * len(data_directories) * forests_per_data_directory
        forest_counter = len(host_names) * len(data_directories) * existing + 1
        remaining_per_directory = forests_per_data_directory - existing

        naming_strategy = self.resolve_naming_strategy(database_name, app_config)
        fast, large = resolve_fast_and_large_directories(database_name, app_config.forests)

        forests: List[Forest] = []
        for host_name in host_names:
            for data_directory in data_directories:
                for _ in range(remaining_per_directory):
                    if forest_counter > number_to_build:
                        break
                    forest = self.new_forest(forest_plan)
                    forest.forest_name = naming_strategy.get_forest_name(
                        database_name, forest_counter, app_config
                    )
                    forest.host = host_name
                    forest.database = database_name
                    if data_directory and data_directory.strip():
                        forest.data_directory = data_directory
                    if fast is not None:
                        forest.fast_data_directory = fast
                    if large is not None:
                        forest.large_data_directory = large
                    forests.append(forest)
                    forest_counter += 1

        if forest_plan.replica_count > 0:
            self.add_replicas_to_forests(forests, forest_plan, app_config, data_directories)

        return forests

    def add_replicas_to_forests(
        self,
        forests: List[Forest],
        forest_plan: ForestPlan,
        app_config: "AppConfig",
        data_directories: List[str],
    ) -> None:
        host_names = forest_plan.host_names
        replica_count = forest_plan.replica_count
        if replica_count >= len(host_names):
            raise ConfigurationError(
                f"Not enough hosts exist to create {replica_count} replicas for database "
                f"'{forest_plan.database_name}'; possible hosts, which may include the host "
                f"with the primary forest and thus cannot have a replica: {host_names}",
                details={
                    "database": forest_plan.database_name,
                    "replica_count": replica_count,
                    "host_names": list(host_names),
                },
            )

        replica_data_directories = self.determine_replica_data_directories(
            forest_plan.database_name, app_config
        )
        if replica_data_directories is None:
            replica_data_directories = data_directories

        self.resolve_replica_strategy(app_config).build_replicas(
            forests,
            forest_plan,
            app_config,
            replica_data_directories,
            self.resolve_naming_strategy(forest_plan.database_name, app_config),
        )

    def new_forest(self, forest_plan: ForestPlan) -> Forest:
        if forest_plan.template is None:
            return Forest()
        forest, error = try_parse_template(forest_plan.template)
        if error is not None:
            logger.warning(
                "Unable to construct a new forest for database '%s' using template %r: %s",
                forest_plan.database_name,
                forest_plan.template,
                error,
            )
            return Forest()
        # Replicas are planned per forest, never copied from the template
        forest.forest_replicas = []
        return forest

    def determine_data_directories(self, database_name: str, app_config: "AppConfig") -> List[str]:
        forest_config = app_config.forests
        directories = forest_config.database_data_directories.get(database_name)
        if directories:
            return list(directories)
        if forest_config.data_directory is not None:
            return [forest_config.data_directory]
        # Placeholder so there is always one directory to iterate over
        return [""]

    def determine_replica_data_directories(
        self,
        database_name: str,
        app_config: "AppConfig",
    ) -> Optional[List[str]]:
        forest_config = app_config.forests
        directories = None
        if forest_config.replica_data_directory is not None:
            directories = [forest_config.replica_data_directory]
        if database_name in forest_config.database_replica_data_directories:
            directories = [forest_config.database_replica_data_directories[database_name]]
        return directories

    def determine_forests_per_data_directory(self, forest_plan: ForestPlan, app_config: "AppConfig") -> int:
        # forest_counts has historically been read as forests per host; it is
        # applied here as forests per data directory.
        count = app_config.forests.forest_counts.get(forest_plan.database_name)
        if count is not None:
            if count < 0:
                raise ConfigurationError(
                    f"Forest count for database '{forest_plan.database_name}' must not be negative, got {count}",
                    details={"database": forest_plan.database_name, "forest_count": count},
                )
            return count
        return forest_plan.forests_per_data_directory

    def resolve_naming_strategy(self, database_name: str, app_config: "AppConfig") -> ForestNamingStrategy:
        override = app_config.forests.forest_naming_strategies.get(database_name)
        return override if override is not None else self.forest_naming_strategy

    def resolve_replica_strategy(self, app_config: "AppConfig") -> ReplicaBuilderStrategy:
        override = app_config.forests.replica_builder_strategy
        if override is not None:
            logger.info("Using replica builder strategy from app config: %s", type(override).__name__)
            return override
        return self.replica_builder_strategy
