"""Predicates about pod scheduling state and ownership."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from nodeprov.objects import (
    POD_FAILED,
    POD_REASON_UNSCHEDULABLE,
    POD_SCHEDULED,
    POD_SUCCEEDED,
    Pod,
)


@dataclass(frozen=True)
class GroupVersionKind:
    group: str = ""
    version: str = ""
    kind: str = ""

    def group_version(self) -> str:
        """Return the ``apiVersion`` string: ``group/version``, or ``version`` alone."""
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version


DAEMONSET_GVK = GroupVersionKind("apps", "v1", "DaemonSet")
NODE_GVK = GroupVersionKind("", "v1", "Node")


def failed_to_schedule(pod: Pod) -> bool:
    """Report whether the scheduler marked the pod unschedulable."""
    return any(
        condition.type == POD_SCHEDULED and condition.reason == POD_REASON_UNSCHEDULABLE
        for condition in pod.status.conditions
    )


def is_scheduled(pod: Pod) -> bool:
    return pod.spec.node_name != ""


def is_preempting(pod: Pod) -> bool:
    return pod.status.nominated_node_name != ""


def is_terminal(pod: Pod) -> bool:
    return pod.status.phase in (POD_FAILED, POD_SUCCEEDED)


def is_terminating(pod: Pod) -> bool:
    return pod.metadata.deletion_timestamp is not None


def is_owned_by_daemonset(pod: Pod) -> bool:
    return is_owned_by(pod, [DAEMONSET_GVK])


def is_owned_by_node(pod: Pod) -> bool:
    """Report whether the pod is a static pod owned by a node."""
    return is_owned_by(pod, [NODE_GVK])


def is_owned_by(pod: Pod, gvks: Iterable[GroupVersionKind]) -> bool:
    """Report whether any owner of the pod has one of the given kinds."""
    return any(
        owner.api_version == gvk.group_version() and owner.kind == gvk.kind
        for gvk in gvks
        for owner in pod.metadata.owner_references
    )