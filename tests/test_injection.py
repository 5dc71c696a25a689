from nodeprov.injection import Context
from nodeprov.objects import NamespacedName
from nodeprov.options import Options


def test_defaults_are_empty():
    ctx = Context()
    assert ctx.namespaced_name == NamespacedName()
    assert ctx.options == Options()
    assert ctx.config is None
    assert ctx.controller_name == ""


def test_with_namespaced_name_leaves_original():
    base = Context()
    derived = base.with_namespaced_name(NamespacedName("ns", "pod"))
    assert derived.namespaced_name == NamespacedName("ns", "pod")
    assert base.namespaced_name == NamespacedName()


def test_with_options():
    opts = Options(cluster_name="test-cluster", cluster_endpoint="https://test-cluster")
    assert Context().with_options(opts).options is opts


def test_with_config():
    config = {"host": "https://test-cluster"}
    assert Context().with_config(config).config == config


def test_chained_values_are_kept():
    ctx = Context().with_controller_name("termination").with_namespaced_name(NamespacedName("", "n1"))
    assert ctx.controller_name == "termination"
    assert ctx.namespaced_name == NamespacedName("", "n1")