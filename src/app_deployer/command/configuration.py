"""Combined request payloads for the Configuration Management API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Configuration:
    """One entry of a combined request, grouping payloads by resource type."""

    resources: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)

    def add(self, resource_type: str, payload: Dict[str, Any]) -> None:
        self.resources.setdefault(resource_type, []).append(payload)

    def resource_count(self) -> int:
        return sum(len(items) for items in self.resources.values())

    def to_payload(self) -> Dict[str, Any]:
        return {key: list(items) for key, items in self.resources.items()}


@dataclass
class Configurations:
    """The single combined request accumulated during a run."""

    configs: List[Configuration] = field(default_factory=list)

    def add_config(self, configuration: Configuration) -> None:
        self.configs.append(configuration)

    def resource_count(self) -> int:
        return sum(config.resource_count() for config in self.configs)

    def is_empty(self) -> bool:
        return self.resource_count() == 0

    def to_payload(self) -> Dict[str, Any]:
        return {"config": [config.to_payload() for config in self.configs]}
