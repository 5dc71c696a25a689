"""Resource quantities and summing pod resource requests and limits."""

from __future__ import annotations

import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from nodeprov.objects import Pod

NVIDIA_GPU = "nvidia.com/gpu"
AMD_GPU = "amd.com/gpu"
AWS_NEURON = "aws.amazon.com/neuron"
AWS_POD_ENI = "vpc.amazonaws.com/pod-eni"

_GPU_RESOURCES = frozenset({NVIDIA_GPU, AMD_GPU, AWS_NEURON})

_QUANTITY = re.compile(
    r"(?P<number>[+-]?(?:\d+(?:\.\d*)?|\.\d+))"
    r"(?:(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|n|u|m|k|M|G|T|P|E)|[eE](?P<exponent>[+-]?\d+))?"
)
_BINARY = {"Ki": 10, "Mi": 20, "Gi": 30, "Ti": 40, "Pi": 50, "Ei": 60}
_DECIMAL = {"n": -9, "u": -6, "m": -3, "k": 3, "M": 6, "G": 9, "T": 12, "P": 15, "E": 18}


def parse_quantity(value: str) -> Decimal:
    """Parse a quantity such as ``"100m"``, ``"1Gi"`` or ``"1e3"``.

    Raises :class:`ValueError` if ``value`` is not a valid quantity.
    """
    match = _QUANTITY.fullmatch(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"quantities must match the regular expression, got {value!r}")
    number = Decimal(match["number"])
    suffix = match["suffix"]
    if suffix in _BINARY:
        return number * (2 ** _BINARY[suffix])
    if suffix in _DECIMAL:
        return number.scaleb(_DECIMAL[suffix])
    if match["exponent"] is not None:
        return number.scaleb(int(match["exponent"]))
    return number


def _as_quantity(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        return parse_quantity(value)
    if isinstance(value, bool):
        raise ValueError(f"not a quantity: {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        try:
            return Decimal(str(value))
        except InvalidOperation as err:
            raise ValueError(f"not a quantity: {value!r}") from err
    raise ValueError(f"not a quantity: {value!r}")


def merge(*resource_lists: Mapping[str, Any] | None) -> dict[str, Decimal]:
    """Sum the given resource lists into one."""
    result: dict[str, Decimal] = {}
    for resource_list in resource_lists:
        for name, quantity in (resource_list or {}).items():
            result[name] = result.get(name, Decimal(0)) + _as_quantity(quantity)
    return result


def requests_for_pods(*pods: Pod) -> dict[str, Decimal]:
    """Return the total requests of all containers of ``pods``."""
    return merge(*(c.requests for pod in pods for c in pod.spec.containers))


def limits_for_pods(*pods: Pod) -> dict[str, Decimal]:
    """Return the total limits of all containers of ``pods``."""
    return merge(*(c.limits for pod in pods for c in pod.spec.containers))


def gpu_limits_for(pod: Pod) -> dict[str, Decimal]:
    """Return the accelerator limits of ``pod``; these must be given as limits."""
    return {
        name: quantity
        for name, quantity in limits_for_pods(pod).items()
        if name in _GPU_RESOURCES
    }