"""Tests for cell formatting helpers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from kubereport.constants.enums import NodeStatus
from kubereport.exceptions import FieldAbsent
from kubereport.utils.formatting import (
    field,
    format_age,
    format_conditions,
    format_duration,
    format_elapsed,
    format_joined,
    format_label_selector,
    format_mapping,
    format_name_list,
    format_taints,
    get_list,
    node_roles,
    node_status,
    require,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestFieldAccess:
    """Tests for require/field/get_list."""

    def test_require_nested(self) -> None:
        """Test dotted paths resolve nested values."""
        assert require({"a": {"b": {"c": 1}}}, "a.b.c") == 1

    @pytest.mark.parametrize(
        "obj", [{}, {"a": None}, {"a": {"b": ""}}, {"a": "scalar"}]
    )
    def test_require_absent(self, obj: dict) -> None:
        """Test missing, None and empty values raise FieldAbsent."""
        with pytest.raises(FieldAbsent):
            require(obj, "a.b")

    def test_field_sentinel(self) -> None:
        """Test field substitutes the sentinel."""
        assert field({}, "spec.clusterIP") == "N/A"
        assert field({}, "spec.clusterIP", "Unknown") == "Unknown"
        assert field({"spec": {"replicas": 3}}, "spec.replicas") == "3"

    def test_get_list_wrong_type(self) -> None:
        """Test get_list ignores non-list values."""
        assert get_list({"spec": {"ports": "80"}}, "spec.ports") == []


class TestDurations:
    """Tests for age and duration formatting."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0, "0s"), (45, "45s"), (90, "1m30s"), (3600, "1h0m0s"), (93600, "26h0m0s"), (-90, "-1m30s")],
    )
    def test_format_duration(self, seconds: int, expected: str) -> None:
        """Test Go-style duration strings."""
        assert format_duration(seconds) == expected

    def test_age_rounds_to_hours(self) -> None:
        """Test ages round to the nearest hour."""
        obj = {"metadata": {"creationTimestamp": "2024-06-01T09:31:00Z"}}
        assert format_age(obj, NOW) == "2h0m0s"
        obj = {"metadata": {"creationTimestamp": "2024-06-01T09:29:00Z"}}
        assert format_age(obj, NOW) == "3h0m0s"

    def test_age_missing(self) -> None:
        """Test a missing timestamp yields Unknown."""
        assert format_age({"metadata": {}}, NOW) == "Unknown"
        assert format_age({"metadata": {"creationTimestamp": "yesterday"}}, NOW) == "Unknown"

    def test_elapsed(self) -> None:
        """Test elapsed time between two fields."""
        job = {"status": {"startTime": "2024-06-01T10:00:00Z", "completionTime": "2024-06-01T10:01:30Z"}}
        assert format_elapsed(job, "status.startTime", "status.completionTime") == "1m30s"
        assert format_elapsed({"status": {}}, "status.startTime", "status.completionTime") == "N/A"


class TestCollections:
    """Tests for mapping, list and condition formatting."""

    def test_conditions_true_only(self) -> None:
        """Test only True-status condition types are listed."""
        obj = {
            "status": {
                "conditions": [
                    {"type": "Available", "status": "True"},
                    {"type": "Progressing", "status": "False"},
                    {"type": "ReplicaFailure", "status": "True"},
                ]
            }
        }
        assert format_conditions(obj) == "Available, ReplicaFailure"

    def test_conditions_none(self) -> None:
        """Test no true conditions yields "None"."""
        assert format_conditions({"status": {}}) == "None"

    def test_mapping_sorted(self) -> None:
        """Test mappings render as sorted pairs."""
        assert format_mapping({"tier": "web", "app": "shop"}) == "app=shop, tier=web"
        assert format_mapping({}) == "N/A"
        assert format_mapping(None) == "N/A"

    def test_name_list(self) -> None:
        """Test bracketed name lists."""
        assert format_name_list(["a", "b"]) == "[a, b]"
        assert format_name_list([]) == "[]"

    def test_joined(self) -> None:
        """Test empty parts are skipped."""
        assert format_joined(["a", "", None, "b"]) == "a, b"
        assert format_joined([]) == "N/A"

    def test_label_selector(self) -> None:
        """Test selectors render like kubectl."""
        selector = {
            "matchLabels": {"app": "web"},
            "matchExpressions": [
                {"key": "tier", "operator": "In", "values": ["a", "b"]},
                {"key": "canary", "operator": "DoesNotExist"},
            ],
        }
        assert format_label_selector(selector) == "app=web,tier in (a,b),!canary"
        assert format_label_selector({}) == "N/A"


class TestNodeHelpers:
    """Tests for node helpers."""

    def test_status(self) -> None:
        """Test the Ready condition maps to NodeStatus."""
        ready = {"status": {"conditions": [{"type": "Ready", "status": "True"}]}}
        not_ready = {"status": {"conditions": [{"type": "Ready", "status": "False"}]}}
        assert node_status(ready) is NodeStatus.READY
        assert node_status(not_ready) is NodeStatus.NOT_READY
        assert node_status({}) is NodeStatus.UNKNOWN

    def test_roles(self) -> None:
        """Test roles come from node-role labels."""
        node = {"metadata": {"labels": {"node-role.kubernetes.io/control-plane": ""}}}
        assert node_roles(node) == "control-plane"
        assert node_roles({"metadata": {"labels": {}}}) == "worker"

    def test_taints(self) -> None:
        """Test taint rendering."""
        node = {"spec": {"taints": [{"key": "dedicated", "value": "gpu", "effect": "NoSchedule"}]}}
        assert format_taints(node) == "dedicated=gpu:NoSchedule"
        assert format_taints({"spec": {}}) == "N/A"
