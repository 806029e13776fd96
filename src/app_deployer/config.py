"""Configuration loading utilities for app-deployer."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type, TypeVar, Union

from dotenv import load_dotenv

from .errors import ConfigurationError

if TYPE_CHECKING:
    from .command.forests.naming import ForestNamingStrategy
    from .command.forests.replicas import ReplicaBuilderStrategy

# Load .env file if it exists
load_dotenv()

_DEFAULT_CONFIG_PATH = Path("config/deployer.json")
_T = TypeVar("_T")


@dataclass
class ManageConfig:
    """Connection settings for the Manage API."""

    host: str = "localhost"
    port: int = 8002
    username: Optional[str] = None
    password: Optional[str] = None
    scheme: str = "http"
    timeout: int = 30
    verify_ssl: bool = True

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


@dataclass
class ForestConfig:
    """Where forests live and how they are named and replicated."""

    data_directory: Optional[str] = None
    fast_data_directory: Optional[str] = None
    large_data_directory: Optional[str] = None
    replica_data_directory: Optional[str] = None

    database_data_directories: Dict[str, List[str]] = field(default_factory=dict)
    database_fast_data_directories: Dict[str, str] = field(default_factory=dict)
    database_large_data_directories: Dict[str, str] = field(default_factory=dict)
    database_replica_data_directories: Dict[str, str] = field(default_factory=dict)

    # Forests per data directory, keyed by database name
    forest_counts: Dict[str, int] = field(default_factory=dict)

    # Strategy objects are assigned in code, never read from JSON
    forest_naming_strategies: Dict[str, "ForestNamingStrategy"] = field(default_factory=dict)
    replica_builder_strategy: Optional["ReplicaBuilderStrategy"] = None


def _build_section(section_cls: Type[_T], section: str, payload: Dict[str, Any]) -> _T:
    if not isinstance(payload, dict):
        raise ConfigurationError(
            f"Configuration section '{section}' must be an object",
            details={"section": section},
        )
    try:
        return section_cls(**{**section_cls().__dict__, **payload})
    except TypeError as exc:
        raise ConfigurationError(
            f"Invalid '{section}' configuration: {exc}",
            details={"section": section, "keys": sorted(payload)},
            cause=exc,
        ) from exc


@dataclass
class DatabaseConfig:
    """A database to deploy along with the forests it needs."""

    name: str
    payload: Dict[str, Any] = field(default_factory=dict)
    forests_per_data_directory: int = 1
    existing_forests_per_data_directory: int = 0
    replica_count: int = 0
    forest_template: Optional[Union[str, Dict[str, Any]]] = None
    group: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.payload:
            self.payload = {"database-name": self.name}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DatabaseConfig":
        if not isinstance(payload, dict) or not payload.get("name"):
            raise ConfigurationError("Every database entry requires a name", details={"entry": payload})
        try:
            return cls(
                name=payload["name"],
                payload=payload.get("payload") or {},
                forests_per_data_directory=int(payload.get("forests_per_data_directory", 1)),
                existing_forests_per_data_directory=int(payload.get("existing_forests_per_data_directory", 0)),
                replica_count=int(payload.get("replica_count", 0)),
                forest_template=payload.get("forest_template"),
                group=payload.get("group"),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Invalid database entry '{payload['name']}': {exc}",
                details={"section": "databases", "database": payload["name"]},
                cause=exc,
            ) from exc


@dataclass
class AppConfig:
    """Top-level configuration."""

    name: str = "my-app"
    manage: ManageConfig = field(default_factory=ManageConfig)
    forests: ForestConfig = field(default_factory=ForestConfig)
    databases: List[DatabaseConfig] = field(default_factory=list)
    custom_tokens: Dict[str, str] = field(default_factory=dict)
    add_host_name_tokens: bool = True
    combine_requests: bool = False
    continue_on_error: bool = False

    def get_database(self, name: str) -> Optional[DatabaseConfig]:
        for database in self.databases:
            if database.name == name:
                return database
        return None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AppConfig":
        # Keys starting with an underscore are comments
        payload = {k: v for k, v in payload.items() if not k.startswith("_")}
        manage_payload = payload.get("manage", {}) or {}
        forest_payload = payload.get("forests", {}) or {}
        database_payloads = payload.get("databases", []) or []

        if isinstance(forest_payload, dict):
            forest_payload = {
                k: v
                for k, v in forest_payload.items()
                if not k.startswith("_")
                and k not in ("forest_naming_strategies", "replica_builder_strategy")
            }

        defaults = cls()
        return cls(
            name=payload.get("name", defaults.name),
            manage=_build_section(ManageConfig, "manage", manage_payload),
            forests=_build_section(ForestConfig, "forests", forest_payload),
            databases=[DatabaseConfig.from_dict(item) for item in database_payloads],
            custom_tokens=dict(payload.get("custom_tokens", {}) or {}),
            add_host_name_tokens=bool(payload.get("add_host_name_tokens", defaults.add_host_name_tokens)),
            combine_requests=bool(payload.get("combine_requests", defaults.combine_requests)),
            continue_on_error=bool(payload.get("continue_on_error", defaults.continue_on_error)),
        )


def _apply_env_overrides(config: AppConfig) -> None:
    env_host = os.getenv("APP_DEPLOYER_MANAGE_HOST")
    if env_host:
        config.manage.host = env_host

    env_port = os.getenv("APP_DEPLOYER_MANAGE_PORT")
    if env_port:
        try:
            config.manage.port = int(env_port)
        except ValueError as exc:
            raise ConfigurationError(
                f"APP_DEPLOYER_MANAGE_PORT must be an integer, got {env_port!r}",
                cause=exc,
            ) from exc

    env_username = os.getenv("APP_DEPLOYER_MANAGE_USERNAME")
    if env_username:
        config.manage.username = env_username

    env_password = os.getenv("APP_DEPLOYER_MANAGE_PASSWORD")
    if env_password:
        config.manage.password = env_password

    env_scheme = os.getenv("APP_DEPLOYER_MANAGE_SCHEME")
    if env_scheme:
        config.manage.scheme = env_scheme

    env_data_dir = os.getenv("APP_DEPLOYER_FOREST_DATA_DIRECTORY")
    if env_data_dir:
        config.forests.data_directory = env_data_dir


def load_config(path: Optional[str] = None) -> AppConfig:
    """Load configuration from `path` or the default location.

    Falls back to defaults when no file is found. Environment variables have
    higher priority than the config file:
    - APP_DEPLOYER_MANAGE_HOST / APP_DEPLOYER_MANAGE_PORT
    - APP_DEPLOYER_MANAGE_USERNAME / APP_DEPLOYER_MANAGE_PASSWORD
    - APP_DEPLOYER_MANAGE_SCHEME
    - APP_DEPLOYER_FOREST_DATA_DIRECTORY
    """

    candidate_paths = []
    if path:
        candidate_paths.append(Path(path))
    candidate_paths.append(_DEFAULT_CONFIG_PATH)

    config: Optional[AppConfig] = None
    for candidate in candidate_paths:
        if candidate.is_file():
            try:
                with candidate.open("r", encoding="utf-8") as handle:
                    data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ConfigurationError(
                    f"Unable to parse configuration file {candidate}: {exc}",
                    details={"path": str(candidate)},
                    cause=exc,
                ) from exc
            config = AppConfig.from_dict(data)
            break

    if config is None:
        if path:
            raise ConfigurationError(f"Configuration file not found: {path}", details={"path": path})
        config = AppConfig()

    _apply_env_overrides(config)
    return config
