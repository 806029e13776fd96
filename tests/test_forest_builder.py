import unittest

from app_deployer.command.forests import (
    DefaultForestNamingStrategy,
    ForestBuilder,
    ForestPlan,
    GroupedReplicaBuilderStrategy,
)
from app_deployer.config import AppConfig
from app_deployer.errors import ConfigurationError


class PrefixNamingStrategy(DefaultForestNamingStrategy):
    def get_forest_name(self, database_name, forest_number, app_config):
        return f"custom-{database_name}-{forest_number:03d}"


def _config(**forests) -> AppConfig:
    config = AppConfig()
    for key, value in forests.items():
        setattr(config.forests, key, value)
    return config


def _placements(forests):
    return [(f.forest_name, f.host, f.data_directory) for f in forests]


class ForestBuilderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.builder = ForestBuilder()

    def test_hosts_by_directories_by_count(self) -> None:
        plan = ForestPlan("db", ["h1", "h2"], forests_per_data_directory=2)
        forests = self.builder.build_forests(plan, _config(data_directory="/d1"))
        self.assertEqual(
            _placements(forests),
            [
                ("db-1", "h1", "/d1"),
                ("db-2", "h1", "/d1"),
                ("db-3", "h2", "/d1"),
                ("db-4", "h2", "/d1"),
            ],
        )
        self.assertTrue(all(f.database == "db" for f in forests))
        self.assertTrue(all(f.forest_replicas == [] for f in forests))

    def test_rerun_only_builds_new_forests(self) -> None:
        plan = ForestPlan(
            "db",
            ["h1", "h2"],
            forests_per_data_directory=3,
            existing_forests_per_data_directory=2,
        )
        forests = self.builder.build_forests(plan, _config(data_directory="/d1"))
        self.assertEqual(_placements(forests), [("db-5", "h1", "/d1"), ("db-6", "h2", "/d1")])

    def test_existing_at_or_above_target_builds_nothing(self) -> None:
        plan = ForestPlan("db", ["h1"], forests_per_data_directory=2, existing_forests_per_data_directory=2)
        self.assertEqual(self.builder.build_forests(plan, AppConfig()), [])
        plan.existing_forests_per_data_directory = 4
        self.assertEqual(self.builder.build_forests(plan, AppConfig()), [])

    def test_zero_hosts_builds_nothing(self) -> None:
        self.assertEqual(self.builder.build_forests(ForestPlan("db", []), AppConfig()), [])

    def test_placeholder_directory_leaves_data_directory_unset(self) -> None:
        forests = self.builder.build_forests(ForestPlan("db", ["h1"]), AppConfig())
        self.assertEqual(len(forests), 1)
        self.assertIsNone(forests[0].data_directory)
        self.assertNotIn("data-directory", forests[0].to_payload())

    def test_database_specific_directories_win(self) -> None:
        config = _config(
            data_directory="/generic",
            database_data_directories={"db": ["/a", "/b"]},
        )
        forests = self.builder.build_forests(ForestPlan("db", ["h1", "h2"]), config)
        self.assertEqual(
            _placements(forests),
            [("db-1", "h1", "/a"), ("db-2", "h1", "/b"), ("db-3", "h2", "/a"), ("db-4", "h2", "/b")],
        )
        other = self.builder.build_forests(ForestPlan("other", ["h1"]), config)
        self.assertEqual(_placements(other), [("other-1", "h1", "/generic")])

    def test_forest_count_override_applies_to_one_database(self) -> None:
        config = _config(forest_counts={"db": 3})
        overridden = self.builder.build_forests(ForestPlan("db", ["h1"], forests_per_data_directory=1), config)
        untouched = self.builder.build_forests(ForestPlan("other", ["h1"], forests_per_data_directory=1), config)
        self.assertEqual(len(overridden), 3)
        self.assertEqual(len(untouched), 1)

    def test_fast_and_large_directories(self) -> None:
        config = _config(
            fast_data_directory="/fast",
            large_data_directory="/large",
            database_fast_data_directories={"db": "/db-fast"},
        )
        forest = self.builder.build_forests(ForestPlan("db", ["h1"]), config)[0]
        self.assertEqual(forest.fast_data_directory, "/db-fast")
        self.assertEqual(forest.large_data_directory, "/large")

    def test_naming_strategy_override_per_database(self) -> None:
        config = _config(forest_naming_strategies={"db": PrefixNamingStrategy()})
        named = self.builder.build_forests(ForestPlan("db", ["h1"]), config)
        default = self.builder.build_forests(ForestPlan("other", ["h1"]), config)
        self.assertEqual(named[0].forest_name, "custom-db-001")
        self.assertEqual(default[0].forest_name, "other-1")

    def test_builder_default_naming_strategy(self) -> None:
        builder = ForestBuilder(forest_naming_strategy=PrefixNamingStrategy())
        self.assertEqual(builder.build_forests(ForestPlan("db", ["h1"]), AppConfig())[0].forest_name, "custom-db-001")

    def test_template_is_base_for_every_forest(self) -> None:
        plan = ForestPlan(
            "db",
            ["h1", "h2"],
            template='{"updates-allowed": "all", "rebalancer-enable": true, "host": "ignored"}',
        )
        forests = self.builder.build_forests(plan, AppConfig())
        self.assertEqual(len(forests), 2)
        for forest in forests:
            payload = forest.to_payload()
            self.assertEqual(payload["updates-allowed"], "all")
            self.assertTrue(payload["rebalancer-enable"])
        self.assertEqual([f.host for f in forests], ["h1", "h2"])
        self.assertIsNot(forests[0].extra, forests[1].extra)

    def test_unparsable_template_falls_back_to_blank_forest(self) -> None:
        plan = ForestPlan("db", ["h1"], template="{not json")
        with self.assertLogs("app_deployer.command.forests.builder", level="WARNING") as logs:
            forests = self.builder.build_forests(plan, AppConfig())
        self.assertEqual(len(forests), 1)
        self.assertEqual(forests[0].extra, {})
        self.assertEqual(forests[0].forest_name, "db-1")
        self.assertIn("db", logs.output[0])

    def test_template_with_malformed_replicas_falls_back_to_blank_forest(self) -> None:
        for template in ('{"forest-replica": ["oops"]}', {"forest-replica": "oops"}):
            plan = ForestPlan("db", ["h1"], template=template)
            with self.assertLogs("app_deployer.command.forests.builder", level="WARNING"):
                forests = self.builder.build_forests(plan, AppConfig())
            self.assertEqual(len(forests), 1)
            self.assertEqual(forests[0].forest_replicas, [])
            self.assertEqual(forests[0].forest_name, "db-1")

    def test_template_replicas_are_not_copied(self) -> None:
        plan = ForestPlan(
            "db",
            ["h1", "h2"],
            template={"updates-allowed": "all", "forest-replica": [{"replica-name": "r", "host": "h1"}]},
        )
        forests = self.builder.build_forests(plan, AppConfig())
        self.assertEqual(len(forests), 2)
        for forest in forests:
            self.assertEqual(forest.forest_replicas, [])
            self.assertNotIn("forest-replica", forest.to_payload())
            self.assertEqual(forest.extra, {"updates-allowed": "all"})

    def test_template_replicas_replaced_by_planned_replicas(self) -> None:
        plan = ForestPlan(
            "db",
            ["h1", "h2"],
            replica_count=1,
            template={"forest-replica": [{"replica-name": "r", "host": "h1"}]},
        )
        forests = self.builder.build_forests(plan, AppConfig())
        self.assertEqual(
            [[r.replica_name for r in f.forest_replicas] for f in forests],
            [["db-1-replica-1"], ["db-2-replica-1"]],
        )

    def test_negative_counts_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.builder.build_forests(ForestPlan("db", ["h1"], replica_count=-1), AppConfig())
        with self.assertRaises(ConfigurationError):
            self.builder.build_forests(ForestPlan("  ", ["h1"]), AppConfig())

    def test_negative_forest_count_override_rejected(self) -> None:
        config = _config(forest_counts={"db": -1})
        with self.assertRaises(ConfigurationError) as ctx:
            self.builder.build_forests(ForestPlan("db", ["h1"]), config)
        self.assertEqual(ctx.exception.details["database"], "db")


class ReplicaPlanningTests(unittest.TestCase):
    def setUp(self) -> None:
        self.builder = ForestBuilder()

    def test_replica_count_must_be_below_host_count(self) -> None:
        for hosts in (["h1"], ["h1", "h2"], ["h1", "h2", "h3"]):
            plan = ForestPlan("db", hosts, replica_count=len(hosts))
            with self.assertRaises(ConfigurationError) as ctx:
                self.builder.build_forests(plan, AppConfig())
            self.assertIn("db", str(ctx.exception))
            self.assertEqual(ctx.exception.details["replica_count"], len(hosts))

    def test_replicas_default_to_primary_directories(self) -> None:
        plan = ForestPlan("db", ["h1", "h2"], replica_count=1)
        forests = self.builder.build_forests(plan, _config(data_directory="/d1"))
        for forest in forests:
            self.assertEqual(len(forest.forest_replicas), 1)
            replica = forest.forest_replicas[0]
            self.assertNotEqual(replica.host, forest.host)
            self.assertEqual(replica.data_directory, "/d1")
            self.assertEqual(replica.replica_name, f"{forest.forest_name}-replica-1")

    def test_replica_directories_override(self) -> None:
        config = _config(
            data_directory="/d1",
            replica_data_directory="/replicas",
            database_replica_data_directories={"special": "/special-replicas"},
        )
        generic = self.builder.build_forests(ForestPlan("db", ["h1", "h2"], replica_count=1), config)
        special = self.builder.build_forests(ForestPlan("special", ["h1", "h2"], replica_count=1), config)
        self.assertEqual(generic[0].forest_replicas[0].data_directory, "/replicas")
        self.assertEqual(special[0].forest_replicas[0].data_directory, "/special-replicas")
        self.assertEqual(special[0].data_directory, "/d1")

    def test_app_config_replica_strategy_wins(self) -> None:
        config = _config(replica_builder_strategy=GroupedReplicaBuilderStrategy())
        self.assertIsInstance(self.builder.resolve_replica_strategy(config), GroupedReplicaBuilderStrategy)
        self.assertIs(self.builder.resolve_replica_strategy(AppConfig()), self.builder.replica_builder_strategy)

    def test_replica_payload_shape(self) -> None:
        forests = self.builder.build_forests(ForestPlan("db", ["h1", "h2"], replica_count=1), AppConfig())
        self.assertEqual(
            forests[0].to_payload(),
            {
                "forest-name": "db-1",
                "host": "h1",
                "database": "db",
                "forest-replica": [{"replica-name": "db-1-replica-1", "host": "h2"}],
            },
        )


if __name__ == "__main__":
    unittest.main()
