from decimal import Decimal

import pytest

from nodeprov.objects import Container, Pod, PodSpec
from nodeprov.resources import (
    AWS_NEURON,
    AWS_POD_ENI,
    NVIDIA_GPU,
    gpu_limits_for,
    limits_for_pods,
    merge,
    parse_quantity,
    requests_for_pods,
)


def _pod(*containers):
    return Pod(spec=PodSpec(containers=list(containers)))


def test_parse_plain_integer():
    assert parse_quantity("1") == 1


def test_parse_milli_is_thousandth():
    assert parse_quantity("1000m") == parse_quantity("1")


def test_parse_binary_suffix():
    assert parse_quantity("1Ki") == 1024
    assert parse_quantity("1Mi") == parse_quantity("1Ki") * 1024


def test_parse_decimal_suffix_and_exponent_agree():
    assert parse_quantity("1k") == parse_quantity("1e3")
    assert parse_quantity("1E") == parse_quantity("1e18")
    assert parse_quantity("1M") == parse_quantity("1000k")


@pytest.mark.parametrize("bad", ["", "abc", "1Xi", "1.2.3", "m"])
def test_parse_rejects_invalid(bad):
    with pytest.raises(ValueError):
        parse_quantity(bad)


def test_merge_single_parses_values():
    assert merge({"cpu": "500m", "memory": "1Gi"}) == {
        "cpu": parse_quantity("500m"),
        "memory": parse_quantity("1Gi"),
    }


def test_merge_sums_and_is_commutative():
    a = {"cpu": "1", NVIDIA_GPU: 2}
    b = {"cpu": Decimal("0.5"), "memory": "1Ki"}
    assert merge(a, b) == merge(b, a)
    assert merge(a, b)["cpu"] == parse_quantity("1500m")
    assert merge(a, b)["memory"] == parse_quantity("1Ki")


def test_merge_empty():
    assert merge() == {}
    assert merge({}, None) == {}


def test_requests_and_limits_for_pods():
    pod1 = _pod(Container(requests={"cpu": "1"}, limits={"cpu": "2"}))
    pod2 = _pod(Container(requests={"cpu": "1"}), Container(limits={"memory": "1Mi"}))
    assert requests_for_pods(pod1, pod2) == merge({"cpu": "1"}, {"cpu": "1"})
    assert limits_for_pods(pod1, pod2) == merge({"cpu": "2"}, {"memory": "1Mi"})


def test_gpu_limits_only_accelerators():
    pod = _pod(
        Container(limits={"cpu": "1", NVIDIA_GPU: "1", AWS_POD_ENI: "1"}),
        Container(limits={AWS_NEURON: "2", NVIDIA_GPU: "1"}),
    )
    gpus = gpu_limits_for(pod)
    assert set(gpus) == {NVIDIA_GPU, AWS_NEURON}
    assert gpus[NVIDIA_GPU] == merge({NVIDIA_GPU: "1"}, {NVIDIA_GPU: "1"})[NVIDIA_GPU]


def test_gpu_limits_ignore_requests():
    pod = _pod(Container(requests={NVIDIA_GPU: "1"}))
    assert gpu_limits_for(pod) == {}