"""Tests for the detailed report collectors."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from kubereport.collectors import detailed
from kubereport.collectors.base import CollectContext, ListCollector, list_kind
from kubereport.constants.enums import ResourceKind
from kubereport.exceptions import CollectionUnavailable
from kubereport.sources.snapshot import SnapshotDataSource

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def context() -> CollectContext:
    """Create a fixed collection context."""
    return CollectContext(now=NOW)


class TestListCollectorHarness:
    """Tests for the generic list harness."""

    @pytest.mark.asyncio
    async def test_empty_kind_keeps_header(self, context: CollectContext) -> None:
        """Test an empty listing yields the header and no rows."""
        table = await detailed.secrets.collect(SnapshotDataSource(), context)
        assert table.columns == detailed.SECRET_COLUMNS
        assert len(table) == 0

    @pytest.mark.asyncio
    async def test_failing_kind(self, context: CollectContext) -> None:
        """Test a failing listing raises CollectionUnavailable naming the kind."""
        source = SnapshotDataSource(failing_kinds=[ResourceKind.INGRESSES])
        with pytest.raises(CollectionUnavailable) as exc_info:
            await detailed.ingresses.collect(source, context)
        assert exc_info.value.kind == "ingresses"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_list_kind_passes_filters(self) -> None:
        """Test list_kind forwards namespace and selector."""
        source = SnapshotDataSource()
        await list_kind(source, ResourceKind.PODS, namespace="a", field_selector="x=y")
        assert source.calls == [(ResourceKind.PODS, "a", "x=y")]

    @pytest.mark.asyncio
    async def test_sorted_by_name_then_namespace(self, context: CollectContext) -> None:
        """Test the default ordering."""
        source = SnapshotDataSource(
            {
                "configmaps": [
                    {"metadata": {"name": "b", "namespace": "x"}},
                    {"metadata": {"name": "a", "namespace": "z"}},
                    {"metadata": {"name": "a", "namespace": "y"}},
                ]
            }
        )
        table = await detailed.configmaps.collect(source, context)
        assert [row[:2] for row in table.rows] == [("a", "y"), ("a", "z"), ("b", "x")]

    def test_every_collector_is_frozen_config(self) -> None:
        """Test list collectors are declared per kind."""
        assert isinstance(detailed.pods, ListCollector)
        assert detailed.pods.kind is ResourceKind.PODS


class TestDetailedProjections:
    """Tests for per-kind rows."""

    @pytest.mark.asyncio
    async def test_pod_row(self, context: CollectContext) -> None:
        """Test pod resources, restarts, conditions and age."""
        pod = {
            "metadata": {
                "name": "web",
                "namespace": "shop",
                "creationTimestamp": "2024-06-01T10:00:00Z",
            },
            "spec": {
                "nodeName": "node-a",
                "containers": [
                    {"resources": {"requests": {"cpu": "100m", "memory": "128Mi"}}},
                    {"resources": {"limits": {"cpu": "1", "memory": "1Gi"}}},
                ],
            },
            "status": {
                "phase": "Running",
                "containerStatuses": [{"restartCount": 2}, {"restartCount": 1}],
                "conditions": [
                    {"type": "Ready", "status": "True"},
                    {"type": "PodScheduled", "status": "True"},
                ],
            },
        }
        table = await detailed.pods.collect(SnapshotDataSource({"pods": [pod]}), context)
        assert table.rows == [
            (
                "web",
                "shop",
                "node-a",
                "100",
                "1000",
                "128",
                "1024",
                "Running",
                "3",
                "Ready, PodScheduled",
                "2h0m0s",
            )
        ]

    @pytest.mark.asyncio
    async def test_missing_fields_use_sentinels(self, context: CollectContext) -> None:
        """Test absent optional fields become N/A or Unknown."""
        service = {"metadata": {"name": "bare", "namespace": "default"}}
        table = await detailed.services.collect(
            SnapshotDataSource({"services": [service]}), context
        )
        row = dict(zip(table.columns, table.rows[0]))
        assert row["SERVICE NAME"] == "bare"
        assert row["CLUSTER IP"] == "N/A"
        assert row["SELECTOR"] == "N/A"
        assert row["AGE"] == "Unknown"
        assert row["CONDITIONS"] == "None"

    @pytest.mark.asyncio
    async def test_node_rows(self, context: CollectContext) -> None:
        """Test node health, roles, pod count and disk usage."""
        source = SnapshotDataSource(
            {
                "nodes": [
                    {
                        "metadata": {
                            "name": "cp-1",
                            "labels": {"node-role.kubernetes.io/control-plane": ""},
                        },
                        "spec": {"unschedulable": True},
                        "status": {
                            "capacity": {"cpu": "2", "memory": "4Gi", "ephemeral-storage": "20Gi"},
                            "conditions": [{"type": "Ready", "status": "False"}],
                        },
                    }
                ],
                "pods": [
                    {"metadata": {"name": "p", "namespace": "kube-system"}, "spec": {"nodeName": "cp-1"}}
                ],
            }
        )
        table = await detailed.nodes.collect(source, context)
        row = dict(zip(table.columns, table.rows[0]))
        assert row["STATUS"] == "Unhealthy"
        assert row["SCHEDULABLE"] == "No"
        assert row["ROLES"] == "control-plane"
        assert row["CPU CAPACITY"] == "2000m"
        assert row["MEMORY CAPACITY"] == "4.00Gi"
        assert row["DISK CAPACITY"] == "20.00Gi"
        assert row["DISK USAGE"] == "N/A"
        assert row["POD COUNT"] == "1"
        assert row["CONDITIONS"] == "None"
        assert row["TAINTS"] == "N/A"

    @pytest.mark.asyncio
    async def test_namespace_counts(self, context: CollectContext) -> None:
        """Test namespace rows count pods by phase and objects by kind."""
        source = SnapshotDataSource(
            {
                "namespaces": [{"metadata": {"name": "shop"}}],
                "pods": [
                    {"metadata": {"name": "a", "namespace": "shop"}, "status": {"phase": "Running"}},
                    {"metadata": {"name": "b", "namespace": "shop"}, "status": {"phase": "Pending"}},
                ],
                "configmaps": [{"metadata": {"name": "c", "namespace": "shop"}}],
            }
        )
        table = await detailed.namespaces.collect(source, context)
        row = dict(zip(table.columns, table.rows[0]))
        assert row["PODS"] == "2"
        assert row["RUNNING PODS"] == "1"
        assert row["PENDING PODS"] == "1"
        assert row["FAILED PODS"] == "0"
        assert row["CONFIGMAPS"] == "1"
        assert row["SECRETS"] == "0"

    @pytest.mark.asyncio
    async def test_persistent_volume_claimant(self, context: CollectContext) -> None:
        """Test the claimant is the first pod by name mounting the claim."""
        mount = {"volumes": [{"name": "d", "persistentVolumeClaim": {"claimName": "data"}}]}
        source = SnapshotDataSource(
            {
                "persistentvolumes": [
                    {
                        "metadata": {"name": "pv-1"},
                        "spec": {
                            "capacity": {"storage": "10Gi"},
                            "accessModes": ["ReadWriteOnce"],
                            "claimRef": {"name": "data", "namespace": "db"},
                        },
                        "status": {"phase": "Bound"},
                    }
                ],
                "pods": [
                    {"metadata": {"name": "zeta", "namespace": "db"}, "spec": mount},
                    {"metadata": {"name": "alpha", "namespace": "db"}, "spec": mount},
                ],
            }
        )
        table = await detailed.persistent_volumes.collect(source, context)
        row = dict(zip(table.columns, table.rows[0]))
        assert row["CAPACITY"] == "10Gi"
        assert row["ACCESS MODES"] == "[ReadWriteOnce]"
        assert row["PERSISTENT VOLUME CLAIM"] == "data"
        assert row["CLAIMANT"] == "alpha"
        assert row["STATUS"] == "Bound"

    @pytest.mark.asyncio
    async def test_secret_values_never_reported(self, context: CollectContext) -> None:
        """Test secret rows carry key counts only."""
        secret = {
            "metadata": {"name": "creds", "namespace": "shop"},
            "type": "Opaque",
            "data": {"password": "c2VjcmV0"},
        }
        table = await detailed.secrets.collect(SnapshotDataSource({"secrets": [secret]}), context)
        assert table.rows[0][:4] == ("creds", "shop", "Opaque", "1")
        assert all("c2VjcmV0" not in cell for cell in table.rows[0])

    @pytest.mark.asyncio
    async def test_deployment_revision(self, context: CollectContext) -> None:
        """Test the revision comes from the deployment annotation."""
        deployment = {
            "metadata": {
                "name": "web",
                "namespace": "shop",
                "annotations": {"deployment.kubernetes.io/revision": "4"},
            },
            "spec": {"replicas": 3, "strategy": {"type": "RollingUpdate"}},
            "status": {"availableReplicas": 2, "readyReplicas": 2, "replicas": 3},
        }
        table = await detailed.deployments.collect(
            SnapshotDataSource({"deployments": [deployment]}), context
        )
        assert table.rows[0][:8] == ("web", "shop", "3", "2", "2", "3", "RollingUpdate", "4")
