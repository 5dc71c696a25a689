from pathlib import Path

from nodeprov import project
from nodeprov.project import relative_to_root


def test_package_directory_under_root():
    assert Path(relative_to_root("nodeprov")) == Path(project.__file__).resolve().parent


def test_joined_path_keeps_name():
    assert Path(relative_to_root("charts/values.yaml")).parts[-2:] == ("charts", "values.yaml")


def test_children_share_root():
    assert Path(relative_to_root("a")).parent == Path(relative_to_root("."))


def test_path_is_normalised():
    assert relative_to_root("a/../b") == relative_to_root("b")


def test_result_is_absolute():
    assert Path(relative_to_root("x")).is_absolute() is True