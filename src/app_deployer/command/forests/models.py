"""In-memory forest and replica models."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from ...config import ForestConfig

_REPLICA_KEYS = {
    "replica-name": "replica_name",
    "host": "host",
    "data-directory": "data_directory",
    "fast-data-directory": "fast_data_directory",
    "large-data-directory": "large_data_directory",
}

_FOREST_KEYS = {
    "forest-name": "forest_name",
    "host": "host",
    "database": "database",
    "data-directory": "data_directory",
    "fast-data-directory": "fast_data_directory",
    "large-data-directory": "large_data_directory",
}


@dataclass
class ForestReplica:
    replica_name: Optional[str] = None
    host: Optional[str] = None
    data_directory: Optional[str] = None
    fast_data_directory: Optional[str] = None
    large_data_directory: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            key: getattr(self, attr)
            for key, attr in _REPLICA_KEYS.items()
            if getattr(self, attr) is not None
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ForestReplica":
        if not isinstance(payload, dict):
            raise TypeError(f"Forest replica payload must be a JSON object, got {type(payload).__name__}")
        return cls(**{attr: payload.get(key) for key, attr in _REPLICA_KEYS.items()})


@dataclass
class Forest:
    """A forest to create, plus any other properties carried over from a template."""

    forest_name: Optional[str] = None
    host: Optional[str] = None
    database: Optional[str] = None
    data_directory: Optional[str] = None
    fast_data_directory: Optional[str] = None
    large_data_directory: Optional[str] = None
    forest_replicas: List[ForestReplica] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload = copy.deepcopy(self.extra)
        for key, attr in _FOREST_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                payload[key] = value
        if self.forest_replicas:
            payload["forest-replica"] = [replica.to_payload() for replica in self.forest_replicas]
        return payload

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Forest":
        if not isinstance(payload, dict):
            raise TypeError(f"Forest payload must be a JSON object, got {type(payload).__name__}")
        known = {attr: payload.get(key) for key, attr in _FOREST_KEYS.items()}
        replica_payloads = payload.get("forest-replica") or []
        if not isinstance(replica_payloads, list):
            raise TypeError("forest-replica must be a JSON array")
        replicas = [ForestReplica.from_payload(item) for item in replica_payloads]
        extra = {
            key: copy.deepcopy(value)
            for key, value in payload.items()
            if key not in _FOREST_KEYS and key != "forest-replica"
        }
        return cls(forest_replicas=replicas, extra=extra, **known)


def try_parse_template(
    template: Union[str, Dict[str, Any]],
) -> Tuple[Optional[Forest], Optional[Exception]]:
    """Parse a forest template, returning ``(forest, None)`` or ``(None, error)``."""
    try:
        payload = json.loads(template) if isinstance(template, str) else template
        return Forest.from_payload(payload), None
    except (ValueError, TypeError) as exc:
        return None, exc


def resolve_fast_and_large_directories(
    database_name: str,
    forest_config: "ForestConfig",
) -> Tuple[Optional[str], Optional[str]]:
    """Database-agnostic directories first, then per-database overrides."""
    fast = forest_config.fast_data_directory
    large = forest_config.large_data_directory
    if database_name in forest_config.database_fast_data_directories:
        fast = forest_config.database_fast_data_directories[database_name]
    if database_name in forest_config.database_large_data_directories:
        large = forest_config.database_large_data_directories[database_name]
    return fast, large
