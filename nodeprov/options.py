"""Runtime options for the controller and their validation."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import urlsplit

from nodeprov.env import with_default_int, with_default_string

NODE_NAME_CONVENTIONS = ("ip-name", "resource-name")


class OptionsError(ValueError):
    """Raised when options fail validation; ``errors`` lists every problem."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass
class Options:
    """Options for running the controller."""

    cluster_name: str = ""
    cluster_endpoint: str = ""
    metrics_port: int = 8080
    health_probe_port: int = 8081
    webhook_port: int = 8443
    kube_client_qps: int = 200
    kube_client_burst: int = 300
    aws_node_name_convention: str = "ip-name"

    def validate(self) -> None:
        """Raise :class:`OptionsError` listing every invalid setting."""
        errors = []
        if not self._endpoint_is_valid():
            errors.append(f'"{self.cluster_endpoint}" not a valid CLUSTER_ENDPOINT URL')
        if self.cluster_name == "":
            errors.append("CLUSTER_NAME is required")
        if self.aws_node_name_convention not in NODE_NAME_CONVENTIONS:
            errors.append("aws-node-name-convention may only be either ip-name or resource-name")
        if errors:
            raise OptionsError(errors)

    def _endpoint_is_valid(self) -> bool:
        try:
            parts = urlsplit(self.cluster_endpoint)
            hostname = parts.hostname
        except ValueError:
            return False
        return bool(parts.scheme) and bool(hostname)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(allow_abbrev=False)

    def add(name: str, dest: str, kind: type, default, help_text: str) -> None:
        parser.add_argument(
            f"-{name}", f"--{name}", dest=dest, type=kind, default=default, help=help_text
        )

    add("cluster-name", "cluster_name", str,
        with_default_string("CLUSTER_NAME", ""),
        "The kubernetes cluster name for resource discovery")
    add("cluster-endpoint", "cluster_endpoint", str,
        with_default_string("CLUSTER_ENDPOINT", ""),
        "The external kubernetes cluster endpoint for new nodes to connect with")
    add("metrics-port", "metrics_port", int,
        with_default_int("METRICS_PORT", 8080),
        "The port the metric endpoint binds to for operating metrics about the controller itself")
    add("health-probe-port", "health_probe_port", int,
        with_default_int("HEALTH_PROBE_PORT", 8081),
        "The port the health probe endpoint binds to for reporting controller health")
    add("port", "webhook_port", int, 8443,
        "The port the webhook endpoint binds to for validation and mutation of resources")
    add("kube-client-qps", "kube_client_qps", int,
        with_default_int("KUBE_CLIENT_QPS", 200),
        "The smoothed rate of qps to kube-apiserver")
    add("kube-client-burst", "kube_client_burst", int,
        with_default_int("KUBE_CLIENT_BURST", 300),
        "The maximum allowed burst of queries to the kube-apiserver")
    add("aws-node-name-convention", "aws_node_name_convention", str,
        with_default_string("AWS_NODE_NAME_CONVENTION", "ip-name"),
        "The node naming convention used by the AWS cloud provider. "
        "DEPRECATION WARNING: this field may be deprecated at any time")
    return parser


def parse_options(argv: Sequence[str] | None = None) -> Options:
    """Parse command-line flags, falling back to environment variables, and validate."""
    namespace = _build_parser().parse_args(argv)
    options = Options(**vars(namespace))
    options.validate()
    return options