"""Building blocks for a node provisioner: object models, predicates, resources, queues and eviction."""

__version__ = "0.1.0"

__all__ = [
    "clock",
    "env",
    "eviction",
    "functional",
    "injection",
    "metrics",
    "nodeutil",
    "objects",
    "options",
    "podutil",
    "pretty",
    "project",
    "resources",
    "result",
    "workqueue",
]