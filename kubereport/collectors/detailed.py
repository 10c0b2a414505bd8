"""Collectors for the detailed (CSV) report, one per resource kind.

Each kind is a column tuple plus a projection; ListCollector does the listing
and the (name, namespace) sort.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from collections.abc import Sequence
from typing import Any

from kubereport.collectors.base import (
    AggregateCollector,
    CollectContext,
    ListCollector,
    Listings,
)
from kubereport.collectors.resources import (
    format_gib,
    format_mib,
    format_millicores,
    pod_totals,
    status_quantity,
    sum_totals,
)
from kubereport.constants.defaults import NOT_AVAILABLE, UNKNOWN
from kubereport.constants.enums import NodeStatus, ResourceKind, UnitClass
from kubereport.utils.formatting import (
    field,
    format_age,
    format_conditions,
    format_count,
    format_elapsed,
    format_joined,
    format_label_selector,
    format_mapping,
    format_name_list,
    format_taints,
    get_list,
    get_mapping,
    name_of,
    namespace_of,
    node_roles,
    node_status,
)
from kubereport.utils.resource_parser import parse_quantity_decimal

logger = logging.getLogger(__name__)

RawObject = dict[str, Any]

_NODE_HEALTH = {
    NodeStatus.READY: "Healthy",
    NodeStatus.NOT_READY: "Unhealthy",
    NodeStatus.UNKNOWN: UNKNOWN,
}


def _annotations(obj: RawObject) -> str:
    return format_mapping(get_mapping(obj, "metadata.annotations"))


def _labels(obj: RawObject) -> str:
    return format_mapping(get_mapping(obj, "metadata.labels"))


def _yes_no(value: Any) -> str:
    return "Yes" if value is True else "No"


def _container_images(obj: RawObject, path: str) -> str:
    return format_joined(
        container.get("image") for container in get_list(obj, path) if isinstance(container, dict)
    )


def _names(items: list[Any], key: str = "name") -> str:
    return format_name_list(item.get(key, "") for item in items if isinstance(item, dict))


def _ports(ports: list[Any]) -> list[str]:
    return [
        f"{port.get('port', '')}/{port.get('protocol', 'TCP')}"
        for port in ports
        if isinstance(port, dict)
    ]


# ============================================================================
# Nodes
# ============================================================================

NODE_COLUMNS = (
    "NODE NAME",
    "STATUS",
    "SCHEDULABLE",
    "ROLES",
    "CPU CAPACITY",
    "CPU REQUESTS",
    "CPU LIMITS",
    "MEMORY CAPACITY",
    "MEMORY REQUESTS",
    "MEMORY LIMITS",
    "DISK CAPACITY",
    "DISK USAGE",
    "NODE AGE",
    "POD COUNT",
    "CONDITIONS",
    "TAINTS",
)


def build_nodes(listings: Listings, context: CollectContext) -> list[Sequence[str]]:
    pods_by_node: dict[str, list[RawObject]] = defaultdict(list)
    for pod in listings[ResourceKind.PODS]:
        pods_by_node[field(pod, "spec.nodeName")].append(pod)

    rows = []
    for node in sorted(listings[ResourceKind.NODES], key=name_of):
        pods = pods_by_node.get(name_of(node), [])
        totals = sum_totals(pods)
        rows.append(
            (
                name_of(node),
                _NODE_HEALTH[node_status(node)],
                "No" if get_mapping(node, "spec").get("unschedulable") else "Yes",
                node_roles(node),
                format_millicores(status_quantity(node, "capacity", "cpu", UnitClass.CPU)) + "m",
                format_millicores(totals.cpu_requests) + "m",
                format_millicores(totals.cpu_limits) + "m",
                format_gib(status_quantity(node, "capacity", "memory", UnitClass.MEMORY)),
                format_gib(totals.memory_requests),
                format_gib(totals.memory_limits),
                format_gib(
                    status_quantity(node, "capacity", "ephemeral-storage", UnitClass.STORAGE)
                ),
                # Disk usage needs the kubelet stats API, which is not listed.
                NOT_AVAILABLE,
                format_age(node, context.now),
                str(len(pods)),
                format_conditions(node),
                format_taints(node),
            )
        )
    return rows


# ============================================================================
# Namespaces
# ============================================================================

NAMESPACE_COLUMNS = (
    "NAMESPACE",
    "PODS",
    "RUNNING PODS",
    "PENDING PODS",
    "FAILED PODS",
    "SERVICES",
    "DEPLOYMENTS",
    "REPLICASETS",
    "STATEFULSETS",
    "DAEMONSETS",
    "CONFIGMAPS",
    "SECRETS",
    "ANNOTATIONS",
    "CPU REQ (MCPU)",
    "CPU LIM (MCPU)",
    "MEMORY REQ (MIB)",
    "MEMORY LIM (MIB)",
)
_NAMESPACE_COUNTED_KINDS = (
    ResourceKind.SERVICES,
    ResourceKind.DEPLOYMENTS,
    ResourceKind.REPLICASETS,
    ResourceKind.STATEFULSETS,
    ResourceKind.DAEMONSETS,
    ResourceKind.CONFIGMAPS,
    ResourceKind.SECRETS,
)


def build_namespaces(listings: Listings, context: CollectContext) -> list[Sequence[str]]:
    pods_by_namespace: dict[str, list[RawObject]] = defaultdict(list)
    for pod in listings[ResourceKind.PODS]:
        pods_by_namespace[namespace_of(pod)].append(pod)
    counts = {
        kind: Counter(namespace_of(item) for item in listings[kind])
        for kind in _NAMESPACE_COUNTED_KINDS
    }

    rows = []
    for namespace in sorted(listings[ResourceKind.NAMESPACES], key=name_of):
        name = name_of(namespace)
        pods = pods_by_namespace.get(name, [])
        phases = Counter(field(pod, "status.phase") for pod in pods)
        totals = sum_totals(pods)
        rows.append(
            (
                name,
                str(len(pods)),
                str(phases["Running"]),
                str(phases["Pending"]),
                str(phases["Failed"]),
                *(str(counts[kind][name]) for kind in _NAMESPACE_COUNTED_KINDS),
                _annotations(namespace),
                format_millicores(totals.cpu_requests),
                format_millicores(totals.cpu_limits),
                format_mib(totals.memory_requests),
                format_mib(totals.memory_limits),
            )
        )
    return rows


# ============================================================================
# Workloads
# ============================================================================

POD_COLUMNS = (
    "POD NAME",
    "NAMESPACE",
    "NODE NAME",
    "CPU REQUESTS",
    "CPU LIMITS",
    "MEMORY REQUESTS",
    "MEMORY LIMITS",
    "STATUS",
    "RESTART COUNT",
    "CONDITIONS",
    "AGE",
)


def project_pod(pod: RawObject, context: CollectContext) -> tuple[str, ...]:
    totals = pod_totals(pod)
    restarts = sum(
        int(status.get("restartCount", 0))
        for status in get_list(pod, "status.containerStatuses")
        if isinstance(status, dict)
    )
    return (
        name_of(pod),
        namespace_of(pod),
        field(pod, "spec.nodeName"),
        format_millicores(totals.cpu_requests),
        format_millicores(totals.cpu_limits),
        format_mib(totals.memory_requests),
        format_mib(totals.memory_limits),
        field(pod, "status.phase", UNKNOWN),
        str(restarts),
        format_conditions(pod),
        format_age(pod, context.now),
    )


DEPLOYMENT_COLUMNS = (
    "DEPLOYMENT NAME",
    "NAMESPACE",
    "REPLICAS",
    "AVAILABLE REPLICAS",
    "PODS READY",
    "PODS DESIRED",
    "STRATEGY TYPE",
    "REVISION",
    "AGE",
    "CONDITIONS",
)


def project_deployment(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (
        name_of(item),
        namespace_of(item),
        field(item, "spec.replicas"),
        field(item, "status.availableReplicas", "0"),
        field(item, "status.readyReplicas", "0"),
        field(item, "status.replicas", "0"),
        field(item, "spec.strategy.type"),
        get_mapping(item, "metadata.annotations").get(
            "deployment.kubernetes.io/revision", NOT_AVAILABLE
        ),
        format_age(item, context.now),
        format_conditions(item),
    )


REPLICASET_COLUMNS = (
    "REPLICASET NAME",
    "NAMESPACE",
    "DESIRED REPLICAS",
    "CURRENT REPLICAS",
    "PODS READY",
    "PODS DESIRED",
    "AGE",
    "CONDITIONS",
)


def project_replicaset(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (
        name_of(item),
        namespace_of(item),
        field(item, "spec.replicas"),
        field(item, "status.replicas", "0"),
        field(item, "status.readyReplicas", "0"),
        field(item, "status.replicas", "0"),
        format_age(item, context.now),
        format_conditions(item),
    )


STATEFULSET_COLUMNS = (
    "STATEFULSET NAME",
    "NAMESPACE",
    "DESIRED REPLICAS",
    "CURRENT REPLICAS",
    "PODS READY",
    "PODS DESIRED",
    "SERVICE NAME",
    "AGE",
    "CONDITIONS",
)


def project_statefulset(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (
        name_of(item),
        namespace_of(item),
        field(item, "spec.replicas"),
        field(item, "status.replicas", "0"),
        field(item, "status.readyReplicas", "0"),
        field(item, "status.replicas", "0"),
        field(item, "spec.serviceName"),
        format_age(item, context.now),
        format_conditions(item),
    )


DAEMONSET_COLUMNS = (
    "DAEMONSET NAME",
    "NAMESPACE",
    "DESIRED PODS",
    "CURRENT PODS",
    "PODS READY",
    "PODS DESIRED",
    "NODE SELECTOR",
    "AGE",
    "CONDITIONS",
)


def project_daemonset(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (
        name_of(item),
        namespace_of(item),
        field(item, "status.desiredNumberScheduled", "0"),
        field(item, "status.currentNumberScheduled", "0"),
        field(item, "status.numberReady", "0"),
        field(item, "status.desiredNumberScheduled", "0"),
        format_mapping(get_mapping(item, "spec.template.spec.nodeSelector")),
        format_age(item, context.now),
        format_conditions(item),
    )


JOB_COLUMNS = (
    "JOB NAME",
    "NAMESPACE",
    "COMPLETIONS",
    "PARALLELISM",
    "ACTIVE PODS",
    "SUCCEEDED PODS",
    "FAILED PODS",
    "AGE",
    "CONDITIONS",
    "JOB DURATION",
    "JOB TEMPLATE",
)


def project_job(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (
        name_of(item),
        namespace_of(item),
        field(item, "spec.completions"),
        field(item, "spec.parallelism"),
        field(item, "status.active", "0"),
        field(item, "status.succeeded", "0"),
        field(item, "status.failed", "0"),
        format_age(item, context.now),
        format_conditions(item),
        format_elapsed(item, "status.startTime", "status.completionTime"),
        _container_images(item, "spec.template.spec.containers"),
    )


CRONJOB_COLUMNS = (
    "CRONJOB NAME",
    "NAMESPACE",
    "SCHEDULE",
    "ACTIVE JOBS",
    "LAST SCHEDULE",
    "AGE",
    "JOB DURATION",
    "JOB TEMPLATE",
    "HISTORY LIMIT",
    "CONCURRENCY POLICY",
)


def project_cronjob(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (
        name_of(item),
        namespace_of(item),
        field(item, "spec.schedule"),
        format_count(get_list(item, "status.active")),
        format_age(item, context.now, "status.lastScheduleTime", NOT_AVAILABLE),
        format_age(item, context.now),
        # Time since the last successful run.
        format_age(item, context.now, "status.lastSuccessfulTime", NOT_AVAILABLE),
        _container_images(item, "spec.jobTemplate.spec.template.spec.containers"),
        field(item, "spec.successfulJobsHistoryLimit"),
        field(item, "spec.concurrencyPolicy"),
    )


HPA_COLUMNS = (
    "HPA NAME",
    "NAMESPACE",
    "SCALE TARGET REF",
    "MIN REPLICAS",
    "MAX REPLICAS",
    "TARGET CPU UTILIZATION",
    "CURRENT REPLICAS",
    "AGE",
    "CONDITIONS",
    "METRICS",
    "CURRENT CPU UTILIZATION",
    "LAST SCALE TIME",
    "BEHAVIOR",
)


def _cpu_metric(metrics: list[Any], value_path: str) -> str:
    for metric in metrics:
        if not isinstance(metric, dict) or metric.get("type") != "Resource":
            continue
        resource = metric.get("resource") or {}
        if resource.get("name") == "cpu":
            return field(resource, value_path)
    return NOT_AVAILABLE


def _metric_names(metrics: list[Any]) -> str:
    names = []
    for metric in metrics:
        if not isinstance(metric, dict):
            continue
        metric_type = metric.get("type", "")
        source = metric.get(metric_type[:1].lower() + metric_type[1:]) or {}
        name = source.get("name") or field(source, "metric.name", "")
        names.append(f"{metric_type}/{name}" if name else metric_type)
    return format_joined(names)


def project_hpa(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    metrics = get_list(item, "spec.metrics")
    target = get_mapping(item, "spec.scaleTargetRef")
    target_cpu = field(item, "spec.targetCPUUtilizationPercentage", "")
    if not target_cpu:
        target_cpu = _cpu_metric(metrics, "target.averageUtilization")
    return (
        name_of(item),
        namespace_of(item),
        f"{target.get('kind', UNKNOWN)}/{target.get('name', UNKNOWN)}",
        field(item, "spec.minReplicas", "1"),
        field(item, "spec.maxReplicas"),
        target_cpu,
        field(item, "status.currentReplicas", "0"),
        format_age(item, context.now),
        format_conditions(item),
        _metric_names(metrics),
        _cpu_metric(get_list(item, "status.currentMetrics"), "current.averageUtilization"),
        field(item, "status.lastScaleTime"),
        format_joined(sorted(get_mapping(item, "spec.behavior"))),
    )


# ============================================================================
# Networking
# ============================================================================

SERVICE_COLUMNS = (
    "SERVICE NAME",
    "NAMESPACE",
    "TYPE",
    "CLUSTER IP",
    "EXTERNAL IP",
    "PORT(S)",
    "TARGET PORT",
    "SELECTOR",
    "SESSION AFFINITY",
    "AGE",
    "CONDITIONS",
)


def project_service(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    ports = get_list(item, "spec.ports")
    external = [
        ingress.get("ip") or ingress.get("hostname")
        for ingress in get_list(item, "status.loadBalancer.ingress")
        if isinstance(ingress, dict)
    ]
    external.extend(get_list(item, "spec.externalIPs"))
    return (
        name_of(item),
        namespace_of(item),
        field(item, "spec.type"),
        field(item, "spec.clusterIP"),
        format_joined(external),
        format_joined(_ports(ports)),
        format_joined(port.get("targetPort") for port in ports if isinstance(port, dict)),
        format_mapping(get_mapping(item, "spec.selector")),
        field(item, "spec.sessionAffinity"),
        format_age(item, context.now),
        format_conditions(item),
    )


ENDPOINT_COLUMNS = ("ENDPOINT NAME", "NAMESPACE", "SUBSETS", "IP ADDRESSES", "PORTS", "AGE")


def project_endpoint(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    subsets = [subset for subset in get_list(item, "subsets") if isinstance(subset, dict)]
    addresses = [
        address.get("ip", "")
        for subset in subsets
        for address in subset.get("addresses") or []
    ]
    ports = [port for subset in subsets for port in _ports(subset.get("ports") or [])]
    return (
        name_of(item),
        namespace_of(item),
        str(len(subsets)),
        format_name_list(addresses),
        format_joined(ports),
        format_age(item, context.now),
    )


INGRESS_COLUMNS = (
    "INGRESS NAME",
    "NAMESPACE",
    "HOST(S)",
    "PATH(S)",
    "BACKEND SERVICE NAME",
    "BACKEND SERVICE PORT",
    "TLS ENABLED",
    "TLS SECRET NAME",
    "INGRESS CLASS",
    "RULES",
    "AGE",
    "ANNOTATIONS",
)


def project_ingress(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    hosts, paths, backends, backend_ports, rules = [], [], [], [], []
    for rule in get_list(item, "spec.rules"):
        if not isinstance(rule, dict):
            continue
        host = rule.get("host") or "*"
        hosts.append(host)
        rule_paths = []
        for path in get_list(rule, "http.paths"):
            rule_paths.append(path.get("path") or "/")
            service = get_mapping(path, "backend.service")
            backends.append(service.get("name"))
            port = service.get("port") or {}
            backend_ports.append(port.get("number") or port.get("name"))
        paths.extend(rule_paths)
        rules.append(f"{host}: {', '.join(rule_paths)}")

    tls = [entry for entry in get_list(item, "spec.tls") if isinstance(entry, dict)]
    ingress_class = field(item, "spec.ingressClassName", "")
    if not ingress_class:
        ingress_class = get_mapping(item, "metadata.annotations").get(
            "kubernetes.io/ingress.class", NOT_AVAILABLE
        )
    return (
        name_of(item),
        namespace_of(item),
        format_joined(hosts),
        format_joined(paths),
        format_joined(backends),
        format_joined(backend_ports),
        "Yes" if tls else "No",
        format_joined(entry.get("secretName") for entry in tls),
        ingress_class,
        format_joined(rules, "; "),
        format_age(item, context.now),
        _annotations(item),
    )


NETWORK_POLICY_COLUMNS = (
    "NETWORK POLICY NAME",
    "NAMESPACE",
    "POD SELECTOR",
    "NAMESPACE SELECTOR",
    "POLICY TYPES",
    "INGRESS RULES",
    "EGRESS RULES",
    "INGRESS ACTION",
    "EGRESS ACTION",
    "MATCH LABELS",
    "AGE",
    "ANNOTATIONS",
)


def _format_peers(peers: list[Any]) -> str:
    parts = []
    for peer in peers:
        if not isinstance(peer, dict):
            continue
        if "ipBlock" in peer:
            parts.append(f"ipBlock {field(peer, 'ipBlock.cidr')}")
        if "namespaceSelector" in peer:
            parts.append(f"namespaces({format_label_selector(peer['namespaceSelector'])})")
        if "podSelector" in peer:
            parts.append(f"pods({format_label_selector(peer['podSelector'])})")
    return ", ".join(parts) if parts else "all"


def _policy_rules(rules: list[Any], direction: str, peer_key: str) -> tuple[str, str]:
    if not rules:
        return (f"Deny {direction} all", "Deny")
    described = [
        f"Allow {direction} {_format_peers(rule.get(peer_key) or [])}"
        for rule in rules
        if isinstance(rule, dict)
    ]
    return ("; ".join(described), "Allow")


def project_network_policy(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    pod_selector = get_mapping(item, "spec.podSelector")
    ingress_rules = get_list(item, "spec.ingress")
    egress_rules = get_list(item, "spec.egress")
    namespace_selectors = [
        format_label_selector(peer["namespaceSelector"])
        for rule in ingress_rules + egress_rules
        if isinstance(rule, dict)
        for peer in (rule.get("from") or rule.get("to") or [])
        if isinstance(peer, dict) and "namespaceSelector" in peer
    ]
    ingress_text, ingress_action = _policy_rules(ingress_rules, "from", "from")
    egress_text, egress_action = _policy_rules(egress_rules, "to", "to")
    return (
        name_of(item),
        namespace_of(item),
        format_label_selector(pod_selector) if pod_selector else "all pods",
        format_joined(namespace_selectors, "; "),
        format_joined(get_list(item, "spec.policyTypes")),
        ingress_text,
        egress_text,
        ingress_action,
        egress_action,
        format_mapping(pod_selector.get("matchLabels")),
        format_age(item, context.now),
        _annotations(item),
    )


# ============================================================================
# Configuration and identity
# ============================================================================

CONFIGMAP_COLUMNS = ("CONFIGMAP NAME", "NAMESPACE", "DATA ITEMS", "AGE", "LABELS")


def project_configmap(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    items = len(get_mapping(item, "data")) + len(get_mapping(item, "binaryData"))
    return (
        name_of(item),
        namespace_of(item),
        str(items),
        format_age(item, context.now),
        _labels(item),
    )


SECRET_COLUMNS = ("SECRET NAME", "NAMESPACE", "TYPE", "DATA ITEMS", "AGE", "LABELS")


def project_secret(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    # Only key counts are reported, never secret values.
    return (
        name_of(item),
        namespace_of(item),
        field(item, "type"),
        str(len(get_mapping(item, "data"))),
        format_age(item, context.now),
        _labels(item),
    )


SERVICEACCOUNT_COLUMNS = (
    "SERVICEACCOUNT NAME",
    "NAMESPACE",
    "SECRETS",
    "ANNOTATIONS",
    "AGE",
    "IMAGE PULL SECRETS",
)


def project_serviceaccount(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (
        name_of(item),
        namespace_of(item),
        _names(get_list(item, "secrets")),
        _annotations(item),
        format_age(item, context.now),
        _names(get_list(item, "imagePullSecrets")),
    )


RESOURCE_QUOTA_COLUMNS = (
    "RESOURCE NAME",
    "NAMESPACE",
    "HARD LIMITS",
    "USED RESOURCES",
    "AGE",
    "ANNOTATIONS",
    "STATUS",
    "USED PODS",
    "REQUEST LIMITS",
    "LIMIT TYPE",
)


def _quota_status(hard: dict[str, Any], used: dict[str, Any]) -> str:
    for resource_name in sorted(hard):
        limit = parse_quantity_decimal(hard[resource_name])
        consumed = parse_quantity_decimal(used.get(resource_name))
        if limit is not None and consumed is not None and consumed > limit:
            return "Exceeded"
    return "Active"


def project_resource_quota(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    hard = get_mapping(item, "spec.hard")
    used = get_mapping(item, "status.used")
    compute = {
        key: value
        for key, value in hard.items()
        if key.startswith(("requests.", "limits.")) or key in ("cpu", "memory")
    }
    return (
        name_of(item),
        namespace_of(item),
        format_mapping(hard),
        format_mapping(used),
        format_age(item, context.now),
        _annotations(item),
        _quota_status(hard, used),
        str(used.get("pods", "0")),
        format_mapping(compute),
        "Resource Limit",
    )


LIMIT_RANGE_COLUMNS = (
    "RESOURCE NAME",
    "NAMESPACE",
    "LIMITS",
    "REQUESTS",
    "AGE",
    "ANNOTATIONS",
    "STATUS",
    "LIMIT TYPE",
    "DEFAULT LIMITS",
    "DEFAULT REQUESTS",
)


def _cpu_memory(values: dict[str, Any]) -> str:
    return f"CPU: {values.get('cpu', NOT_AVAILABLE)}, Memory: {values.get('memory', NOT_AVAILABLE)}"


def project_limit_range(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    limits = [limit for limit in get_list(item, "spec.limits") if isinstance(limit, dict)]
    bounds = [
        f"{limit.get('type', UNKNOWN)}: max[{format_mapping(limit.get('max'))}] "
        f"min[{format_mapping(limit.get('min'))}]"
        for limit in limits
    ]
    requests = [
        f"{limit.get('type', UNKNOWN)}: {format_mapping(limit.get('defaultRequest'))}"
        for limit in limits
    ]
    default_limits = next(
        (_cpu_memory(limit["default"]) for limit in limits if limit.get("default")),
        NOT_AVAILABLE,
    )
    default_requests = next(
        (_cpu_memory(limit["defaultRequest"]) for limit in limits if limit.get("defaultRequest")),
        NOT_AVAILABLE,
    )
    return (
        name_of(item),
        namespace_of(item),
        format_joined(bounds, "; "),
        format_joined(requests, "; "),
        format_age(item, context.now),
        _annotations(item),
        "Active",
        format_joined(limit.get("type") for limit in limits),
        default_limits,
        default_requests,
    )


# ============================================================================
# Storage
# ============================================================================

PERSISTENT_VOLUME_COLUMNS = (
    "PV NAME",
    "CAPACITY",
    "ACCESS MODES",
    "RECLAIM POLICY",
    "STATUS",
    "PERSISTENT VOLUME CLAIM",
    "STORAGE CLASS",
    "AGE",
    "PHASE",
    "ANNOTATIONS",
    "CLAIMANT",
    "VOLUME MODE",
    "MOUNT OPTIONS",
)


def build_persistent_volumes(
    listings: Listings, context: CollectContext
) -> list[Sequence[str]]:
    # (namespace, claim) -> name of the first pod, by name, mounting it
    claimants: dict[tuple[str, str], str] = {}
    for pod in sorted(listings[ResourceKind.PODS], key=name_of):
        for volume in get_list(pod, "spec.volumes"):
            claim = field(volume, "persistentVolumeClaim.claimName", "")
            if claim:
                claimants.setdefault((namespace_of(pod), claim), name_of(pod))

    rows = []
    for pv in sorted(listings[ResourceKind.PERSISTENT_VOLUMES], key=name_of):
        claim_ref = get_mapping(pv, "spec.claimRef")
        claim = claim_ref.get("name")
        claimant = claimants.get((claim_ref.get("namespace", ""), claim or ""), UNKNOWN)
        rows.append(
            (
                name_of(pv),
                field(pv, "spec.capacity.storage"),
                format_name_list(get_list(pv, "spec.accessModes")),
                field(pv, "spec.persistentVolumeReclaimPolicy"),
                field(pv, "status.phase", UNKNOWN),
                claim or NOT_AVAILABLE,
                field(pv, "spec.storageClassName"),
                format_age(pv, context.now),
                field(pv, "status.phase", UNKNOWN),
                _annotations(pv),
                claimant,
                field(pv, "spec.volumeMode"),
                format_name_list(get_list(pv, "spec.mountOptions")),
            )
        )
    return rows


PVC_COLUMNS = (
    "PVC NAME",
    "NAMESPACE",
    "STATUS",
    "VOLUME",
    "CAPACITY",
    "ACCESS MODES",
    "STORAGE CLASS",
    "AGE",
    "VOLUME MODE",
    "ANNOTATIONS",
    "SELECTOR",
)


def project_pvc(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (
        name_of(item),
        namespace_of(item),
        field(item, "status.phase", UNKNOWN),
        field(item, "spec.volumeName"),
        field(item, "status.capacity.storage", UNKNOWN),
        format_name_list(get_list(item, "spec.accessModes")),
        field(item, "spec.storageClassName"),
        format_age(item, context.now),
        field(item, "spec.volumeMode"),
        _annotations(item),
        format_label_selector(get_mapping(item, "spec.selector")),
    )


STORAGE_CLASS_COLUMNS = (
    "STORAGECLASS NAME",
    "PROVISIONER",
    "RECLAIM POLICY",
    "BINDING MODE",
    "ALLOW VOLUME EXPANSION",
    "DEFAULT",
    "PARAMETERS",
    "AGE",
    "ANNOTATIONS",
)


def project_storage_class(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    annotations = get_mapping(item, "metadata.annotations")
    is_default = annotations.get("storageclass.kubernetes.io/is-default-class") == "true"
    return (
        name_of(item),
        field(item, "provisioner"),
        field(item, "reclaimPolicy"),
        field(item, "volumeBindingMode"),
        _yes_no(item.get("allowVolumeExpansion")),
        "true" if is_default else "false",
        format_mapping(get_mapping(item, "parameters")),
        format_age(item, context.now),
        format_mapping(annotations),
    )


# ============================================================================
# RBAC
# ============================================================================

ROLE_COLUMNS = ("ROLE NAME", "NAMESPACE", "RULES", "AGE", "ANNOTATIONS")


def _rules(item: RawObject) -> list[dict[str, Any]]:
    return [rule for rule in get_list(item, "rules") if isinstance(rule, dict)]


def project_role(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    rules = [
        f"[{', '.join(rule.get('verbs') or [])}] on [{', '.join(rule.get('resources') or [])}]"
        for rule in _rules(item)
    ]
    return (
        name_of(item),
        namespace_of(item),
        format_joined(rules, "; "),
        format_age(item, context.now),
        _annotations(item),
    )


ROLE_BINDING_COLUMNS = (
    "ROLEBINDING NAME",
    "NAMESPACE",
    "ROLE NAME",
    "SUBJECTS",
    "KIND",
    "API GROUP",
    "AGE",
    "ANNOTATIONS",
)


def project_role_binding(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    return (
        name_of(item),
        namespace_of(item),
        field(item, "roleRef.name"),
        _names(get_list(item, "subjects")),
        field(item, "roleRef.kind"),
        field(item, "roleRef.apiGroup"),
        format_age(item, context.now),
        _annotations(item),
    )


CLUSTER_ROLE_COLUMNS = (
    "CLUSTERROLE NAME",
    "RULES",
    "API GROUPS",
    "RESOURCES",
    "VERBS",
    "AGE",
    "ANNOTATIONS",
)


def _unique(rules: list[dict[str, Any]], key: str) -> list[str]:
    seen: dict[str, None] = {}
    for rule in rules:
        for value in rule.get(key) or []:
            seen.setdefault(str(value), None)
    return list(seen)


def project_cluster_role(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    rules = _rules(item)
    described = [
        f"APIGroups: {format_name_list(rule.get('apiGroups') or [])}, "
        f"Resources: {format_name_list(rule.get('resources') or [])}, "
        f"Verbs: {format_name_list(rule.get('verbs') or [])}"
        for rule in rules
    ]
    return (
        name_of(item),
        "[" + "; ".join(described) + "]",
        format_name_list(_unique(rules, "apiGroups")),
        format_name_list(_unique(rules, "resources")),
        format_name_list(_unique(rules, "verbs")),
        format_age(item, context.now),
        _annotations(item),
    )


CLUSTER_ROLE_BINDING_COLUMNS = (
    "CLUSTERROLEBINDING NAME",
    "CLUSTERROLE NAME",
    "SUBJECTS",
    "ROLEREF API GROUP",
    "ROLEREF KIND",
    "ROLEREF NAME",
    "AGE",
    "ANNOTATIONS",
)


def project_cluster_role_binding(item: RawObject, context: CollectContext) -> tuple[str, ...]:
    subjects = [
        f"{subject.get('kind', UNKNOWN)}/{subject.get('name', UNKNOWN)}"
        for subject in get_list(item, "subjects")
        if isinstance(subject, dict)
    ]
    return (
        name_of(item),
        field(item, "roleRef.name"),
        format_name_list(subjects),
        field(item, "roleRef.apiGroup"),
        field(item, "roleRef.kind"),
        field(item, "roleRef.name"),
        format_age(item, context.now),
        _annotations(item),
    )


# ============================================================================
# Collector instances
# ============================================================================

nodes = AggregateCollector(
    kinds=(ResourceKind.NODES, ResourceKind.PODS),
    columns=NODE_COLUMNS,
    build=build_nodes,
)
namespaces = AggregateCollector(
    kinds=(ResourceKind.NAMESPACES, ResourceKind.PODS, *_NAMESPACE_COUNTED_KINDS),
    columns=NAMESPACE_COLUMNS,
    build=build_namespaces,
)
persistent_volumes = AggregateCollector(
    kinds=(ResourceKind.PERSISTENT_VOLUMES, ResourceKind.PODS),
    columns=PERSISTENT_VOLUME_COLUMNS,
    build=build_persistent_volumes,
)
pods = ListCollector(ResourceKind.PODS, POD_COLUMNS, project_pod)
deployments = ListCollector(ResourceKind.DEPLOYMENTS, DEPLOYMENT_COLUMNS, project_deployment)
services = ListCollector(ResourceKind.SERVICES, SERVICE_COLUMNS, project_service)
endpoints = ListCollector(ResourceKind.ENDPOINTS, ENDPOINT_COLUMNS, project_endpoint)
replicasets = ListCollector(ResourceKind.REPLICASETS, REPLICASET_COLUMNS, project_replicaset)
statefulsets = ListCollector(
    ResourceKind.STATEFULSETS, STATEFULSET_COLUMNS, project_statefulset
)
daemonsets = ListCollector(ResourceKind.DAEMONSETS, DAEMONSET_COLUMNS, project_daemonset)
configmaps = ListCollector(ResourceKind.CONFIGMAPS, CONFIGMAP_COLUMNS, project_configmap)
secrets = ListCollector(ResourceKind.SECRETS, SECRET_COLUMNS, project_secret)
serviceaccounts = ListCollector(
    ResourceKind.SERVICEACCOUNTS, SERVICEACCOUNT_COLUMNS, project_serviceaccount
)
persistent_volume_claims = ListCollector(
    ResourceKind.PERSISTENT_VOLUME_CLAIMS, PVC_COLUMNS, project_pvc
)
storage_classes = ListCollector(
    ResourceKind.STORAGE_CLASSES, STORAGE_CLASS_COLUMNS, project_storage_class
)
ingresses = ListCollector(ResourceKind.INGRESSES, INGRESS_COLUMNS, project_ingress)
network_policies = ListCollector(
    ResourceKind.NETWORK_POLICIES, NETWORK_POLICY_COLUMNS, project_network_policy
)
resource_quotas = ListCollector(
    ResourceKind.RESOURCE_QUOTAS, RESOURCE_QUOTA_COLUMNS, project_resource_quota
)
limit_ranges = ListCollector(
    ResourceKind.LIMIT_RANGES, LIMIT_RANGE_COLUMNS, project_limit_range
)
horizontal_pod_autoscalers = ListCollector(
    ResourceKind.HORIZONTAL_POD_AUTOSCALERS, HPA_COLUMNS, project_hpa
)
jobs = ListCollector(ResourceKind.JOBS, JOB_COLUMNS, project_job)
cronjobs = ListCollector(ResourceKind.CRONJOBS, CRONJOB_COLUMNS, project_cronjob)
roles = ListCollector(ResourceKind.ROLES, ROLE_COLUMNS, project_role)
role_bindings = ListCollector(
    ResourceKind.ROLE_BINDINGS, ROLE_BINDING_COLUMNS, project_role_binding
)
cluster_roles = ListCollector(
    ResourceKind.CLUSTER_ROLES, CLUSTER_ROLE_COLUMNS, project_cluster_role
)
cluster_role_bindings = ListCollector(
    ResourceKind.CLUSTER_ROLE_BINDINGS,
    CLUSTER_ROLE_BINDING_COLUMNS,
    project_cluster_role_binding,
)
