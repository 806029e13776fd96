"""Manage API collaborators: HTTP client, host discovery, resource managers."""

from .client import ManageClient
from .hosts import DefaultHostNameProvider, HostManager, HostNameProvider
from .resources import (
    ConfigurationManager,
    DatabaseManager,
    ForestManager,
    ResourceManager,
    SaveReceipt,
)

__all__ = [
    "ManageClient",
    "HostManager",
    "HostNameProvider",
    "DefaultHostNameProvider",
    "ResourceManager",
    "DatabaseManager",
    "ForestManager",
    "ConfigurationManager",
    "SaveReceipt",
]
