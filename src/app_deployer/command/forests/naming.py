"""Forest naming strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...config import AppConfig


class ForestNamingStrategy(ABC):
    @abstractmethod
    def get_forest_name(self, database_name: str, forest_number: int, app_config: "AppConfig") -> str:
        pass

    @abstractmethod
    def get_replica_name(
        self,
        database_name: str,
        forest_name: str,
        replica_number: int,
        app_config: "AppConfig",
    ) -> str:
        pass


class DefaultForestNamingStrategy(ForestNamingStrategy):
    """Names forests ``<database>-<n>`` and replicas ``<forest>-replica-<n>``."""

    def get_forest_name(self, database_name: str, forest_number: int, app_config: "AppConfig") -> str:
        return f"{database_name}-{forest_number}"

    def get_replica_name(
        self,
        database_name: str,
        forest_name: str,
        replica_number: int,
        app_config: "AppConfig",
    ) -> str:
        return f"{forest_name}-replica-{replica_number}"
