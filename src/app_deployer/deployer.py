"""Deployer: runs commands in sort order with listener hooks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

from .command.base import Command, UndoableCommand
from .errors import CommandExecutionError
from .listeners import DeployerListener

if TYPE_CHECKING:
    from .command.context import CommandContext
    from .config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class DeploymentContext:
    """What listeners see: the shared command context and the sorted commands."""

    command_context: "CommandContext"
    commands: List[Command]
    undeploy: bool = False

    @property
    def app_config(self) -> "AppConfig":
        return self.command_context.app_config


@dataclass
class CommandFailure:
    command_name: str
    error: Exception


@dataclass
class DeploymentResult:
    executed: List[str] = field(default_factory=list)
    failures: List[CommandFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


def sort_commands_for_deploy(commands: Sequence[Command]) -> List[Command]:
    # sorted() is stable, so equal sort orders keep registration order
    return sorted(commands, key=lambda command: command.sort_order_on_create)


def sort_commands_for_undeploy(commands: Sequence[Command]) -> List[UndoableCommand]:
    undoable = [command for command in commands if isinstance(command, UndoableCommand)]
    return sorted(undoable, key=lambda command: -command.sort_order_on_delete)


class Deployer:
    """
    Executes a fixed list of commands against one CommandContext.

    A failing command aborts the run unless ``continue_on_error`` is set, in
    which case the failure is recorded and the next command runs. Nothing is
    rolled back.
    """

    def __init__(
        self,
        commands: Sequence[Command],
        listeners: Optional[Sequence[DeployerListener]] = None,
        continue_on_error: Optional[bool] = None,
    ) -> None:
        self.commands = list(commands)
        self.listeners = list(listeners or [])
        self.continue_on_error = continue_on_error

    def deploy(self, context: "CommandContext") -> DeploymentResult:
        commands = sort_commands_for_deploy(self.commands)
        logger.info("Deploying %s with %d command(s)", context.app_config.name, len(commands))
        return self._run(context, commands, undeploy=False)

    def undeploy(self, context: "CommandContext") -> DeploymentResult:
        commands = sort_commands_for_undeploy(self.commands)
        logger.info("Undeploying %s with %d command(s)", context.app_config.name, len(commands))
        return self._run(context, commands, undeploy=True)

    def _run(
        self,
        context: "CommandContext",
        commands: List[Command],
        *,
        undeploy: bool,
    ) -> DeploymentResult:
        deployment_context = DeploymentContext(context, commands, undeploy=undeploy)
        continue_on_error = self._continue_on_error(context)
        result = DeploymentResult()

        for listener in self.listeners:
            listener.before_commands_executed(deployment_context)

        for command in commands:
            for listener in self.listeners:
                listener.before_command_executed(command, deployment_context)

            try:
                self._invoke(command, context, undeploy)
            except Exception as exc:
                error = self._wrap(command, exc)
                if not continue_on_error:
                    if error is exc:
                        raise
                    raise error from exc
                logger.error("%s; continuing with the next command", error)
                result.failures.append(CommandFailure(command.name, error))
                continue

            result.executed.append(command.name)
            for listener in self.listeners:
                listener.after_command_executed(command, deployment_context)

        for listener in self.listeners:
            listener.after_commands_executed(deployment_context)

        return result

    def _invoke(self, command: Command, context: "CommandContext", undeploy: bool) -> None:
        if undeploy:
            logger.info("Undoing %s (sort order %d)", command.name, command.sort_order_on_delete)
            command.undo(context)
        else:
            logger.info("Executing %s (sort order %d)", command.name, command.sort_order_on_create)
            command.execute(context)

    def _continue_on_error(self, context: "CommandContext") -> bool:
        if self.continue_on_error is not None:
            return self.continue_on_error
        return context.app_config.continue_on_error

    @staticmethod
    def _wrap(command: Command, exc: Exception) -> CommandExecutionError:
        if isinstance(exc, CommandExecutionError):
            return exc
        details = dict(getattr(exc, "details", {}) or {})
        details["command"] = command.name
        return CommandExecutionError(command.name, str(exc), details=details, cause=exc)
