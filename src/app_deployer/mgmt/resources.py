"""Resource managers for the Manage API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional
from urllib.parse import quote

from ..errors import ConfigurationError, ManageApiError
from .client import ManageClient

if TYPE_CHECKING:
    from ..command.configuration import Configurations

logger = logging.getLogger(__name__)


@dataclass
class SaveReceipt:
    resource_id: str
    updated: bool


class ResourceManager:
    """Create-or-update and delete for one kind of resource.

    Subclasses set ``resource_path`` (the collection URL) and ``id_field``
    (the payload key holding the resource name).
    """

    resource_path: str = ""
    id_field: str = ""
    delete_params: Optional[Dict[str, Any]] = None

    def __init__(self, client: ManageClient) -> None:
        self.client = client

    def resource_id(self, payload: Dict[str, Any]) -> str:
        value = payload.get(self.id_field)
        if not value:
            raise ConfigurationError(
                f"Payload for {self.resource_path} is missing '{self.id_field}'",
                details={"payload": payload},
            )
        return str(value)

    def exists(self, resource_id: str) -> bool:
        try:
            self.client.get_json(self._item_path(resource_id), params={"format": "json"})
        except ManageApiError as exc:
            if exc.status_code == 404:
                return False
            raise
        return True

    def save(self, payload: Dict[str, Any]) -> SaveReceipt:
        resource_id = self.resource_id(payload)
        if self.exists(resource_id):
            logger.info("Updating %s %s", self.resource_path, resource_id)
            self.client.put_json(f"{self._item_path(resource_id)}/properties", payload)
            return SaveReceipt(resource_id=resource_id, updated=True)

        logger.info("Creating %s %s", self.resource_path, resource_id)
        self.client.post_json(self.resource_path, payload)
        return SaveReceipt(resource_id=resource_id, updated=False)

    def delete(self, resource_id: str) -> bool:
        if not self.exists(resource_id):
            logger.info("%s %s does not exist, nothing to delete", self.resource_path, resource_id)
            return False
        logger.info("Deleting %s %s", self.resource_path, resource_id)
        self.client.delete(self._item_path(resource_id), params=self.delete_params)
        return True

    def _item_path(self, resource_id: str) -> str:
        return f"{self.resource_path}/{quote(resource_id, safe='')}"


class DatabaseManager(ResourceManager):
    resource_path = "/manage/v2/databases"
    id_field = "database-name"


class ForestManager(ResourceManager):
    resource_path = "/manage/v2/forests"
    id_field = "forest-name"
    delete_params = {"level": "full"}


class ConfigurationManager:
    """Submits combined requests to the Configuration Management API."""

    path = "/api/configurations/v1"

    def __init__(self, client: ManageClient) -> None:
        self.client = client

    def submit(self, configurations: "Configurations") -> None:
        logger.info("Submitting combined request with %d resource(s)", configurations.resource_count())
        self.client.post_json(self.path, configurations.to_payload())
