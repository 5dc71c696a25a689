"""Predicates about node status."""

from __future__ import annotations

from collections.abc import Iterable

from nodeprov.objects import CONDITION_TRUE, NODE_READY, Node, NodeCondition


def get_condition(conditions: Iterable[NodeCondition], match: str) -> NodeCondition:
    """Return the first condition of type ``match``, or an empty condition."""
    return next((c for c in conditions if c.type == match), NodeCondition())


def is_ready(node: Node) -> bool:
    return get_condition(node.status.conditions, NODE_READY).status == CONDITION_TRUE