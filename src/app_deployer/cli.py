"""Command-line interface for app-deployer."""

from __future__ import annotations

import argparse
import json
from typing import Optional

from .command.forests import ForestBuilder, ForestPlan
from .config import load_config
from .errors import DeployerError
from .utils.logging import configure_logging, get_logger
from .workflow import DeploymentWorkflow

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="app-deployer",
        description="Deploy databases and forests through the Manage API.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a JSON config file overriding defaults.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every Manage API request.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("deploy", help="Run every configured command in create order")
    subparsers.add_parser("undeploy", help="Undo every configured command in delete order")
    subparsers.add_parser("hosts", help="List the host names in the cluster")

    plan_parser = subparsers.add_parser(
        "plan-forests", help="Print the forests that would be created, without contacting the server"
    )
    plan_parser.add_argument("--database", required=True, help="Database name")
    plan_parser.add_argument(
        "--hosts", required=True, help="Comma-separated host names, in placement order"
    )
    plan_parser.add_argument("--forests-per-data-directory", type=int, default=1)
    plan_parser.add_argument(
        "--existing", type=int, default=0,
        help="Forests per data directory that already exist",
    )
    plan_parser.add_argument("--replicas", type=int, default=0, help="Replicas per forest")

    return parser


def handle_plan_forests(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    plan = ForestPlan(
        database_name=args.database,
        host_names=[host.strip() for host in args.hosts.split(",") if host.strip()],
        forests_per_data_directory=args.forests_per_data_directory,
        existing_forests_per_data_directory=args.existing,
        replica_count=args.replicas,
    )
    forests = ForestBuilder().build_forests(plan, config)
    print(json.dumps([forest.to_payload() for forest in forests], indent=2))
    return 0


def dispatch_command(args: argparse.Namespace) -> int:
    if args.command == "plan-forests":
        return handle_plan_forests(args)

    workflow = DeploymentWorkflow(load_config(args.config))

    if args.command == "hosts":
        for host_name in workflow.host_names():
            print(host_name)
        return 0

    if args.command in ("deploy", "undeploy"):
        result = workflow.deploy() if args.command == "deploy" else workflow.undeploy()
        for failure in result.failures:
            logger.error("%s failed: %s", failure.command_name, failure.error)
        logger.info(
            "%s finished: %d command(s) executed, %d failed",
            args.command,
            len(result.executed),
            len(result.failures),
        )
        return 0 if result.success else 1

    raise ValueError(f"Unsupported command: {args.command}")


def run_cli(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)
    try:
        return dispatch_command(args)
    except DeployerError as exc:
        logger.error("%s", exc)
        return 1
