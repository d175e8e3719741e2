"""Tests for FormulaExecutor, the bottom-up traversal driver."""

import logging

from coverage_rollup.component.model import Component, ComponentType
from coverage_rollup.formula.counter import CreateMeasureContext, LeafAggregateContext
from coverage_rollup.formula.coverage.counters import ElementsAndCoveredElementsCounter
from coverage_rollup.formula.coverage.formulas import (
    BranchCoverageFormula,
    CodeCoverageFormula,
    CoverageFamily,
    LineCoverageFormula,
)
from coverage_rollup.formula.executor import FormulaExecutor, execute_formulas
from coverage_rollup.measures.repository import Measure


def node(key: str, component_type: ComponentType, *children: Component) -> Component:
    component = Component(key=key, name=key, type=component_type)
    for child in children:
        component.add_child(child)
    return component


def value(repository, component, metric_key):
    measure = repository.get_raw_measure(component, metric_key)
    return measure.value if measure is not None else None


class CountingCounter(ElementsAndCoveredElementsCounter):
    """Counts leaf visits; elements = number of leaves seen."""

    def _aggregate_for_supported_leaf(self, context: LeafAggregateContext) -> None:
        self.elements += 1
        self.covered_elements += 1


class LeafCountFormula:
    name = "leaf_count"
    output_metric_keys = ("leaf_count",)

    def __init__(self):
        self.counters: list[CountingCounter] = []

    def create_new_counter(self) -> CountingCounter:
        counter = CountingCounter()
        self.counters.append(counter)
        return counter

    def create_measure(self, counter, context: CreateMeasureContext):
        return Measure(context.metric_key, counter.elements)


class TestFormulaExecutor:
    """Tests for rolling counters up the tree."""

    def test_unit_test_file_excluded_up_to_project(self, repository, make_file):
        """Production file 10/7 plus test file 5/5 gives 70% everywhere above."""
        file_a = make_file("src/a.py", 10, 3)
        file_b = make_file("src/test_a.py", 5, 0, unit_test=True)
        directory = node("src", ComponentType.DIRECTORY, file_a, file_b)
        project = node("acme", ComponentType.PROJECT, directory)

        FormulaExecutor(repository, [LineCoverageFormula()]).execute(project)

        assert value(repository, file_a, "line_coverage") == 70.0
        assert value(repository, file_b, "line_coverage") is None
        assert value(repository, directory, "line_coverage") == 70.0
        assert value(repository, project, "line_coverage") == 70.0

    def test_child_order_does_not_matter(self, repository, make_file):
        """(4,4), (6,3), (2,0) give 7/12 whichever way the children are ordered."""
        files = [make_file("a.py", 4, 0), make_file("b.py", 6, 3), make_file("c.py", 2, 2)]
        forward = node("forward", ComponentType.DIRECTORY, *files)
        execute_formulas(forward, repository, [LineCoverageFormula()])

        reversed_files = [make_file("c2.py", 2, 2), make_file("b2.py", 6, 3), make_file("a2.py", 4, 0)]
        backward = node("backward", ComponentType.DIRECTORY, *reversed_files)
        execute_formulas(backward, repository, [LineCoverageFormula()])

        assert value(repository, forward, "line_coverage") == 58.3
        assert value(repository, backward, "line_coverage") == 58.3

    def test_empty_directory_produces_no_measure(self, repository, make_file):
        """An empty subtree merges as zero and reports nothing."""
        empty = node("empty", ComponentType.DIRECTORY)
        full = node("full", ComponentType.DIRECTORY, make_file("a.py", 8, 2))
        project = node("acme", ComponentType.PROJECT, empty, full)

        summary = FormulaExecutor(repository, [LineCoverageFormula()]).execute(project)

        assert value(repository, empty, "line_coverage") is None
        assert value(repository, project, "line_coverage") == 75.0
        assert summary.leaves_visited == 1

    def test_formulas_do_not_share_counters(self, repository, make_file):
        """Each formula keeps its own totals in the same traversal."""
        leaf = make_file("a.py", 10, 3, conditions_to_cover=4, uncovered_conditions=2)
        project = node("acme", ComponentType.PROJECT, node("src", ComponentType.DIRECTORY, leaf))

        FormulaExecutor(
            repository,
            [LineCoverageFormula(), BranchCoverageFormula(), CodeCoverageFormula()],
        ).execute(project)

        assert value(repository, project, "line_coverage") == 70.0
        assert value(repository, project, "branch_coverage") == 50.0
        assert value(repository, project, "coverage") == 64.3

    def test_families_are_independent(self, repository, make_file):
        """Missing integration test data yields no it_ measure."""
        leaf = make_file("a.py", 10, 0)
        project = node("acme", ComponentType.PROJECT, leaf)

        FormulaExecutor(
            repository,
            [LineCoverageFormula(), LineCoverageFormula(CoverageFamily.IT)],
        ).execute(project)

        assert value(repository, project, "line_coverage") == 100.0
        assert value(repository, project, "it_line_coverage") is None

    def test_each_leaf_visited_once_per_counter(self, repository, make_file):
        """Every leaf reaches exactly one counter per formula, once."""
        files = [make_file(f"f{i}.py") for i in range(5)]
        project = node(
            "acme",
            ComponentType.PROJECT,
            node("d1", ComponentType.DIRECTORY, *files[:2]),
            node("d2", ComponentType.DIRECTORY, files[2], node("d3", ComponentType.DIRECTORY, *files[3:])),
        )
        formula = LeafCountFormula()

        summary = FormulaExecutor(repository, [formula]).execute(project)

        assert value(repository, project, "leaf_count") == 5
        assert summary.leaves_visited == 5
        assert summary.nodes_visited == 9
        # one counter per node, never reused
        assert len(formula.counters) == 9
        assert len({id(c) for c in formula.counters}) == 9

    def test_project_view_leaf_counts(self, repository):
        """PROJECT_VIEW nodes are leaves of view trees and contribute."""
        project_view = node("pv", ComponentType.PROJECT_VIEW)
        repository.add(project_view, Measure("lines_to_cover", 20))
        repository.add(project_view, Measure("uncovered_lines", 5))
        view = node("portfolio", ComponentType.VIEW, node("sub", ComponentType.SUBVIEW, project_view))

        FormulaExecutor(repository, [LineCoverageFormula()]).execute(view)

        assert value(repository, view, "line_coverage") == 75.0

    def test_children_of_leaf_types_are_ignored(self, repository, make_file, caplog):
        leaf = make_file("a.py", 10, 5)
        leaf.add_child(make_file("nested.py", 10, 0))

        with caplog.at_level(logging.WARNING, logger="coverage_rollup.formula.executor"):
            summary = FormulaExecutor(repository, [LineCoverageFormula()]).execute(leaf)

        assert value(repository, leaf, "line_coverage") == 50.0
        assert summary.nodes_visited == 1
        assert any("Ignoring 1 children" in r.message for r in caplog.records)

    def test_summary_counts_measures(self, repository, make_file):
        project = node("acme", ComponentType.PROJECT, make_file("a.py", 4, 1), make_file("b.py"))

        summary = FormulaExecutor(repository, [LineCoverageFormula()]).execute(project)

        # a.py and the project; b.py has nothing to cover
        assert summary.measures_created == 2
        assert summary.to_dict() == {"nodes_visited": 3, "leaves_visited": 2, "measures_created": 2}

    def test_no_formulas_is_a_no_op(self, repository, make_file, caplog):
        project = node("acme", ComponentType.PROJECT, make_file("a.py", 4, 1))

        with caplog.at_level(logging.WARNING, logger="coverage_rollup.formula.executor"):
            summary = FormulaExecutor(repository, []).execute(project)

        assert summary.nodes_visited == 0
        assert "No formulas" in caplog.text

    def test_logs_summary_at_info(self, repository, make_file, caplog):
        project = node("acme", ComponentType.PROJECT, make_file("a.py", 4, 1))

        with caplog.at_level(logging.INFO, logger="coverage_rollup.formula.executor"):
            FormulaExecutor(repository, [LineCoverageFormula()]).execute(project)

        assert any("Executed 1 formula(s) on acme" in r.message for r in caplog.records)
