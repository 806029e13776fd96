"""Database deployment."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..mgmt.resources import DatabaseManager
from . import sort_order
from .resource import ResourceCommand


class DeployDatabaseCommand(ResourceCommand):
    resource_type = "database"

    def __init__(
        self,
        payloads: List[Dict[str, Any]],
        sort_order_on_create: int = sort_order.DEPLOY_DATABASES,
        sort_order_on_delete: Optional[int] = None,
    ) -> None:
        super().__init__(payloads, DatabaseManager, sort_order_on_create, sort_order_on_delete)
