"""Command contract executed by the Deployer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .context import CommandContext


class Command(ABC):
    """A unit of deployable work, run in ascending sort order."""

    def __init__(self, sort_order_on_create: int = 0, name: Optional[str] = None) -> None:
        self.sort_order_on_create = sort_order_on_create
        self._name = name

    @property
    def name(self) -> str:
        return self._name or type(self).__name__

    @abstractmethod
    def execute(self, context: "CommandContext") -> None:
        """Apply this command's changes."""
        pass

    def __repr__(self) -> str:
        return f"{self.name}(sort_order_on_create={self.sort_order_on_create})"


class UndoableCommand(Command):
    """A command that can also remove what it deployed.

    The delete sort order mirrors the create sort order until set explicitly;
    the Deployer runs undo in descending delete order.
    """

    def __init__(
        self,
        sort_order_on_create: int = 0,
        sort_order_on_delete: Optional[int] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(sort_order_on_create, name=name)
        self._sort_order_on_delete = sort_order_on_delete

    @property
    def sort_order_on_delete(self) -> int:
        if self._sort_order_on_delete is None:
            return self.sort_order_on_create
        return self._sort_order_on_delete

    @sort_order_on_delete.setter
    def sort_order_on_delete(self, value: Optional[int]) -> None:
        self._sort_order_on_delete = value

    @abstractmethod
    def undo(self, context: "CommandContext") -> None:
        """Remove this command's changes."""
        pass


class CustomCommand(UndoableCommand):
    """Wraps plain callables so projects can add their own steps."""

    def __init__(
        self,
        name: str,
        sort_order: int,
        execute_fn: Callable[["CommandContext"], None],
        undo_fn: Optional[Callable[["CommandContext"], None]] = None,
        sort_order_on_delete: Optional[int] = None,
    ) -> None:
        super().__init__(sort_order, sort_order_on_delete, name=name)
        self.execute_fn = execute_fn
        self.undo_fn = undo_fn

    def execute(self, context: "CommandContext") -> None:
        self.execute_fn(context)

    def undo(self, context: "CommandContext") -> None:
        if self.undo_fn is not None:
            self.undo_fn(context)
