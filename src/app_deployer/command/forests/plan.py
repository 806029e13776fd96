"""Declarative forest requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ...errors import ConfigurationError


@dataclass
class ForestPlan:
    """How many forests and replicas a database needs, and on which hosts.

    ``existing_forests_per_data_directory`` counts forests assumed to exist
    already; planning numbers new forests after them.
    """

    database_name: str
    host_names: List[str] = field(default_factory=list)
    forests_per_data_directory: int = 1
    existing_forests_per_data_directory: int = 0
    replica_count: int = 0
    template: Optional[Union[str, Dict[str, Any]]] = None

    def validate(self) -> None:
        if not self.database_name or not self.database_name.strip():
            raise ConfigurationError("ForestPlan requires a database name")
        for attr in (
            "forests_per_data_directory",
            "existing_forests_per_data_directory",
            "replica_count",
        ):
            value = getattr(self, attr)
            if value < 0:
                raise ConfigurationError(
                    f"{attr} must not be negative for database '{self.database_name}', got {value}",
                    details={"database": self.database_name, attr: value},
                )
