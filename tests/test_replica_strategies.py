"""Tests for replica placement strategies."""

from app_deployer.command.forests import (
    DefaultForestNamingStrategy,
    DistributedReplicaBuilderStrategy,
    Forest,
    ForestBuilder,
    ForestPlan,
    GroupedReplicaBuilderStrategy,
)
from app_deployer.config import AppConfig


def _replica_hosts(forests):
    return {f.forest_name: [r.host for r in f.forest_replicas] for f in forests}


class TestDistributedReplicaBuilderStrategy:
    def test_replicas_never_share_primary_host(self):
        plan = ForestPlan("db", ["h1", "h2", "h3", "h4"], forests_per_data_directory=3, replica_count=3)
        forests = ForestBuilder().build_forests(plan, AppConfig())

        assert len(forests) == 12
        for forest in forests:
            hosts = [r.host for r in forest.forest_replicas]
            assert len(hosts) == 3
            assert forest.host not in hosts
            assert len(set(hosts)) == 3

    def test_consecutive_forests_rotate_replica_hosts(self):
        plan = ForestPlan("db", ["h1", "h2", "h3"], forests_per_data_directory=2, replica_count=1)
        forests = ForestBuilder().build_forests(plan, AppConfig())

        assert _replica_hosts(forests) == {
            "db-1": ["h2"],
            "db-2": ["h3"],
            "db-3": ["h3"],
            "db-4": ["h1"],
            "db-5": ["h1"],
            "db-6": ["h2"],
        }

    def test_replica_data_directories_cycle_per_forest(self):
        forests = [Forest(forest_name=f"db-{i}", host="h1", database="db") for i in (1, 2, 3)]
        plan = ForestPlan("db", ["h1", "h2"], replica_count=1)
        DistributedReplicaBuilderStrategy().build_replicas(
            forests, plan, AppConfig(), ["/r1", "/r2"], DefaultForestNamingStrategy()
        )

        assert [f.forest_replicas[0].data_directory for f in forests] == ["/r1", "/r2", "/r1"]

    def test_replicas_inherit_fast_and_large_directories(self):
        config = AppConfig()
        config.forests.fast_data_directory = "/fast"
        config.forests.database_large_data_directories = {"db": "/db-large"}
        forests = ForestBuilder().build_forests(ForestPlan("db", ["h1", "h2"], replica_count=1), config)

        replica = forests[0].forest_replicas[0]
        assert replica.fast_data_directory == "/fast"
        assert replica.large_data_directory == "/db-large"


class TestGroupedReplicaBuilderStrategy:
    def test_replicas_follow_next_hosts(self):
        config = AppConfig()
        config.forests.replica_builder_strategy = GroupedReplicaBuilderStrategy()
        plan = ForestPlan("db", ["h1", "h2", "h3"], forests_per_data_directory=2, replica_count=2)
        forests = ForestBuilder().build_forests(plan, config)

        assert _replica_hosts(forests) == {
            "db-1": ["h2", "h3"],
            "db-2": ["h2", "h3"],
            "db-3": ["h3", "h1"],
            "db-4": ["h3", "h1"],
            "db-5": ["h1", "h2"],
            "db-6": ["h1", "h2"],
        }
        assert [r.replica_name for r in forests[0].forest_replicas] == ["db-1-replica-1", "db-1-replica-2"]
