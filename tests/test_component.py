"""Tests for the component tree model and measure repository."""

import pytest

from coverage_rollup.component.model import Component, ComponentType, FileAttributes
from coverage_rollup.measures.repository import (
    Measure,
    MeasureAlreadyDefinedError,
    MeasureRepository,
)


class TestComponentType:
    @pytest.mark.parametrize(
        "component_type",
        [ComponentType.PROJECT, ComponentType.MODULE, ComponentType.DIRECTORY, ComponentType.FILE],
    )
    def test_report_types(self, component_type):
        assert component_type.is_report_type
        assert not component_type.is_view_type

    @pytest.mark.parametrize(
        "component_type",
        [ComponentType.VIEW, ComponentType.SUBVIEW, ComponentType.PROJECT_VIEW],
    )
    def test_view_types(self, component_type):
        assert component_type.is_view_type
        assert not component_type.is_report_type

    def test_leaf_types(self):
        leaf_types = {t for t in ComponentType if t.is_leaf_type}
        assert leaf_types == {ComponentType.FILE, ComponentType.PROJECT_VIEW}

    def test_from_value(self):
        assert ComponentType("project_view") is ComponentType.PROJECT_VIEW


class TestComponent:
    def test_missing_attributes_are_neutral(self):
        """No file attributes reads as a non-test file."""
        directory = Component(key="src", name="src", type=ComponentType.DIRECTORY)
        assert directory.get_file_attributes() == FileAttributes()
        assert directory.get_file_attributes().unit_test is False

    def test_add_child_sets_parent(self):
        parent = Component(key="src", name="src", type=ComponentType.DIRECTORY)
        child = Component(key="src/a.py", name="a.py")

        parent.add_child(child)

        assert child.parent is parent
        assert child in parent.children
        assert not parent.is_leaf
        assert child.is_leaf

    def test_depth(self):
        root = Component(key="p", name="p", type=ComponentType.PROJECT)
        directory = Component(key="d", name="d", type=ComponentType.DIRECTORY)
        leaf = Component(key="f", name="f")
        root.add_child(directory)
        directory.add_child(leaf)

        assert [root.depth, directory.depth, leaf.depth] == [0, 1, 2]

    def test_iter_nodes_is_pre_order(self):
        root = Component(key="p", name="p", type=ComponentType.PROJECT)
        d1 = Component(key="d1", name="d1", type=ComponentType.DIRECTORY)
        d2 = Component(key="d2", name="d2", type=ComponentType.DIRECTORY)
        d1.add_child(Component(key="f1", name="f1"))
        root.add_child(d1)
        root.add_child(d2)

        assert [n.key for n in root.iter_nodes()] == ["p", "d1", "f1", "d2"]

    def test_to_dict(self):
        leaf = Component(
            key="t",
            name="test_a.py",
            file_attributes=FileAttributes(unit_test=True, language_key="py"),
        )
        root = Component(key="p", name="p", type=ComponentType.PROJECT)
        root.add_child(leaf)

        d = root.to_dict()

        assert d["type"] == "project"
        assert d["children"][0] == {
            "key": "t",
            "name": "test_a.py",
            "type": "file",
            "unit_test": True,
            "language": "py",
        }


class TestMeasureRepository:
    def test_get_missing_measure(self):
        repository = MeasureRepository()
        component = Component(key="a", name="a")
        assert repository.get_raw_measure(component, "coverage") is None
        assert repository.get_measures(component) == {}

    def test_add_and_get(self):
        repository = MeasureRepository()
        component = Component(key="a", name="a")

        repository.add(component, Measure("coverage", 75.0))

        assert repository.get_raw_measure(component, "coverage") == Measure("coverage", 75.0)
        assert list(repository.get_measures(component)) == ["coverage"]
        assert len(repository) == 1

    def test_add_twice_raises(self):
        repository = MeasureRepository()
        component = Component(key="a", name="a")
        repository.add(component, Measure("coverage", 75.0))

        with pytest.raises(MeasureAlreadyDefinedError, match="coverage"):
            repository.add(component, Measure("coverage", 80.0))

    def test_measure_to_dict(self):
        assert Measure("coverage", 75.0).to_dict() == {"metric": "coverage", "value": 75.0}
        assert Measure("x", 1, data="d").to_dict()["data"] == "d"
