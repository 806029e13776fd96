"""Commands that push resource payloads to the Manage API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from ..mgmt.resources import ConfigurationManager, ResourceManager
from ..tokens import build_tokens, replace_tokens
from . import sort_order
from .base import Command, UndoableCommand
from .configuration import Configuration

if TYPE_CHECKING:
    from ..mgmt.client import ManageClient
    from .context import CommandContext

logger = logging.getLogger(__name__)

ManagerFactory = Callable[["ManageClient"], ResourceManager]


class ResourceCommand(UndoableCommand):
    """Saves a list of payloads for one resource type.

    When the app config has ``combine_requests`` enabled the payloads are
    appended to the run's combined request instead of being saved one by one;
    a SubmitCombinedRequestCommand later sends them in a single call.
    """

    resource_type: str = ""

    def __init__(
        self,
        payloads: List[Dict[str, Any]],
        manager_factory: ManagerFactory,
        sort_order_on_create: int,
        sort_order_on_delete: Optional[int] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(sort_order_on_create, sort_order_on_delete, name=name)
        self.payloads = payloads
        self.manager_factory = manager_factory
        self._manager: Optional[ResourceManager] = None

    def get_manager(self, context: "CommandContext") -> ResourceManager:
        if self._manager is None:
            self._manager = self.manager_factory(context.manage_client)
        return self._manager

    def prepare_payloads(self, context: "CommandContext") -> List[Dict[str, Any]]:
        tokens = build_tokens(context.app_config)
        return [replace_tokens(payload, tokens) for payload in self.payloads]

    def execute(self, context: "CommandContext") -> None:
        payloads = self.prepare_payloads(context)
        if not payloads:
            logger.info("%s has no %s to deploy", self.name, self.resource_type)
            return

        if context.app_config.combine_requests:
            configuration = Configuration()
            for payload in payloads:
                configuration.add(self.resource_type, payload)
            context.add_to_combined_request(configuration)
            logger.info("Added %d %s payload(s) to the combined request", len(payloads), self.resource_type)
            return

        manager = self.get_manager(context)
        for payload in payloads:
            manager.save(payload)

    def undo(self, context: "CommandContext") -> None:
        manager = self.get_manager(context)
        for payload in self.prepare_payloads(context):
            manager.delete(manager.resource_id(payload))


class SubmitCombinedRequestCommand(Command):
    """Sends the combined request built by earlier commands, then clears it."""

    def __init__(self, sort_order_on_create: int = sort_order.SUBMIT_COMBINED_REQUEST) -> None:
        super().__init__(sort_order_on_create)

    def execute(self, context: "CommandContext") -> None:
        combined = context.get_combined_request()
        if combined is None:
            logger.info("No combined request to submit")
            return
        ConfigurationManager(context.manage_client).submit(combined)
        context.clear_combined_request()
