"""Forest deployment for a single database."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from ...mgmt.resources import ForestManager
from .. import sort_order
from ..base import UndoableCommand
from ..configuration import Configuration
from .builder import ForestBuilder
from .models import Forest
from .plan import ForestPlan

if TYPE_CHECKING:
    from ...config import DatabaseConfig
    from ..context import CommandContext

logger = logging.getLogger(__name__)


class DeployForestsCommand(UndoableCommand):
    """Plans forests for one database and creates them."""

    def __init__(
        self,
        database: "DatabaseConfig",
        forest_builder: Optional[ForestBuilder] = None,
        sort_order_on_create: int = sort_order.DEPLOY_FORESTS,
        sort_order_on_delete: Optional[int] = None,
    ) -> None:
        super().__init__(
            sort_order_on_create,
            sort_order_on_delete,
            name=f"DeployForestsCommand[{database.name}]",
        )
        self.database = database
        self.forest_builder = forest_builder or ForestBuilder()

    def build_forest_plan(self, context: "CommandContext") -> ForestPlan:
        if self.database.group:
            host_names = context.get_group_host_names(self.database.group)
        else:
            host_names = context.get_host_names()
        return ForestPlan(
            database_name=self.database.name,
            host_names=host_names,
            forests_per_data_directory=self.database.forests_per_data_directory,
            existing_forests_per_data_directory=self.database.existing_forests_per_data_directory,
            replica_count=self.database.replica_count,
            template=self.database.forest_template,
        )

    def plan(self, context: "CommandContext") -> List[Forest]:
        forests = self.forest_builder.build_forests(self.build_forest_plan(context), context.app_config)
        logger.info("Planned %d forest(s) for database %s", len(forests), self.database.name)
        return forests

    def execute(self, context: "CommandContext") -> None:
        forests = self.plan(context)
        if not forests:
            return

        if context.app_config.combine_requests:
            configuration = Configuration()
            for forest in forests:
                configuration.add("forest", forest.to_payload())
            context.add_to_combined_request(configuration)
            return

        manager = ForestManager(context.manage_client)
        for forest in forests:
            manager.save(forest.to_payload())

    def undo(self, context: "CommandContext") -> None:
        manager = ForestManager(context.manage_client)
        for forest in self.plan(context):
            manager.delete(forest.forest_name)
