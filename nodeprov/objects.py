"""Cluster object models shared by the controllers, plus small helpers on them."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from nodeprov.result import Result

LABEL_HOSTNAME = "kubernetes.io/hostname"
LABEL_TOPOLOGY_ZONE = "topology.kubernetes.io/zone"
TAINT_NODE_UNSCHEDULABLE = "node.kubernetes.io/unschedulable"
TAINT_EFFECT_NO_SCHEDULE = "NoSchedule"
TOLERATION_OP_EXISTS = "Exists"
TOLERATION_OP_EQUAL = "Equal"
NODE_SELECTOR_OP_IN = "In"
NODE_SELECTOR_OP_NOT_IN = "NotIn"
NODE_SELECTOR_OP_EXISTS = "Exists"
NODE_SELECTOR_OP_DOES_NOT_EXIST = "DoesNotExist"
POD_SCHEDULED = "PodScheduled"
POD_REASON_UNSCHEDULABLE = "Unschedulable"
POD_FAILED = "Failed"
POD_SUCCEEDED = "Succeeded"
NODE_READY = "Ready"
CONDITION_TRUE = "True"
CONDITION_FALSE = "False"


@dataclass(frozen=True)
class NamespacedName:
    """The key that identifies an object: its namespace and name."""

    namespace: str = ""
    name: str = ""

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass
class OwnerReference:
    api_version: str = ""
    kind: str = ""
    name: str = ""


@dataclass
class ObjectMeta:
    name: str = ""
    namespace: str = ""
    uid: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] | None = None
    owner_references: list[OwnerReference] = field(default_factory=list)
    deletion_timestamp: datetime | None = None


@dataclass
class Toleration:
    key: str = ""
    operator: str = ""
    value: str = ""
    effect: str = ""
    toleration_seconds: int | None = None


@dataclass
class NodeSelectorRequirement:
    key: str = ""
    operator: str = ""
    values: list[str] | None = None


@dataclass
class NodeSelectorTerm:
    match_expressions: list[NodeSelectorRequirement] | None = None
    match_fields: list[NodeSelectorRequirement] | None = None


@dataclass
class PreferredSchedulingTerm:
    weight: int = 0
    preference: NodeSelectorTerm = field(default_factory=NodeSelectorTerm)


@dataclass
class NodeSelector:
    node_selector_terms: list[NodeSelectorTerm] = field(default_factory=list)


@dataclass
class NodeAffinity:
    required_during_scheduling_ignored_during_execution: NodeSelector | None = None
    preferred_during_scheduling_ignored_during_execution: list[PreferredSchedulingTerm] = field(
        default_factory=list
    )


@dataclass
class Affinity:
    node_affinity: NodeAffinity | None = None
    pod_affinity: Any = None
    pod_anti_affinity: Any = None


@dataclass
class TopologySpreadConstraint:
    max_skew: int = 1
    topology_key: str = ""
    when_unsatisfiable: str = "DoNotSchedule"


@dataclass
class Container:
    """A container; ``requests`` and ``limits`` map resource names to quantities."""

    name: str = ""
    requests: dict[str, Any] = field(default_factory=dict)
    limits: dict[str, Any] = field(default_factory=dict)


@dataclass
class PodSpec:
    node_name: str = ""
    node_selector: dict[str, str] = field(default_factory=dict)
    affinity: Affinity | None = None
    tolerations: list[Toleration] = field(default_factory=list)
    containers: list[Container] = field(default_factory=list)
    topology_spread_constraints: list[TopologySpreadConstraint] = field(default_factory=list)
    priority_class_name: str = ""


@dataclass
class PodCondition:
    type: str = ""
    status: str = ""
    reason: str = ""


@dataclass
class PodStatus:
    phase: str = ""
    conditions: list[PodCondition] = field(default_factory=list)
    nominated_node_name: str = ""


@dataclass
class Pod:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: PodSpec = field(default_factory=PodSpec)
    status: PodStatus = field(default_factory=PodStatus)


@dataclass
class NodeCondition:
    type: str = ""
    status: str = ""
    reason: str = ""


@dataclass
class NodeSpec:
    unschedulable: bool = False


@dataclass
class NodeStatus:
    conditions: list[NodeCondition] = field(default_factory=list)


@dataclass
class Node:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: NodeSpec = field(default_factory=NodeSpec)
    status: NodeStatus = field(default_factory=NodeStatus)


class APIError(Exception):
    """An error returned by the cluster API, carrying its HTTP status code."""

    def __init__(self, message: str, code: int = 500) -> None:
        super().__init__(message)
        self.code = code


class NotFoundError(APIError):
    """The requested object does not exist."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=404)


@runtime_checkable
class Reconciler(Protocol):
    """Something that reconciles the object with the given key."""

    def reconcile(self, name: NamespacedName) -> Result: ...


def object_key(obj: Pod | Node) -> NamespacedName:
    """Return the namespaced name identifying ``obj``."""
    return NamespacedName(obj.metadata.namespace, obj.metadata.name)


def pod_namespaced_names(pods: Iterable[Pod]) -> list[NamespacedName]:
    """Return the keys of ``pods`` in order."""
    return [object_key(pod) for pod in pods]


def copy_pods(pods: Iterable[Pod]) -> list[Pod]:
    """Return independent copies of ``pods``."""
    return [copy.deepcopy(pod) for pod in pods]