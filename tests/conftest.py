"""Pytest configuration and shared fixtures for coverage-rollup tests."""

import json
import logging
from pathlib import Path

import pytest

from coverage_rollup.component.model import Component, ComponentType, FileAttributes
from coverage_rollup.formula.counter import LeafAggregateContext
from coverage_rollup.measures.repository import Measure, MeasureRepository


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Keep tests away from the real home directory and working directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for var in (
        "COVERAGE_ROLLUP_FORMULAS",
        "COVERAGE_ROLLUP_DECIMAL_SCALE",
        "COVERAGE_ROLLUP_OUTPUT_FORMAT",
        "COVERAGE_ROLLUP_CONFIG",
        "COVERAGE_ROLLUP_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    yield
    # the CLI sets the package logger level from --log-level
    logging.getLogger("coverage_rollup").setLevel(logging.NOTSET)


@pytest.fixture
def repository():
    return MeasureRepository()


@pytest.fixture
def make_file(repository):
    """Factory for FILE components with raw line measures stored in `repository`."""

    def _make(
        key: str,
        lines: int | None = None,
        uncovered: int | None = None,
        *,
        unit_test: bool = False,
        attributes: bool = True,
        **measures: int,
    ) -> Component:
        component = Component(
            key=key,
            name=key,
            type=ComponentType.FILE,
            file_attributes=FileAttributes(unit_test=unit_test) if attributes else None,
        )
        if lines is not None:
            repository.add(component, Measure("lines_to_cover", lines))
        if uncovered is not None:
            repository.add(component, Measure("uncovered_lines", uncovered))
        for metric_key, value in measures.items():
            repository.add(component, Measure(metric_key, value))
        return component

    return _make


@pytest.fixture
def leaf_context(repository):
    """Build the LeafAggregateContext a counter sees for a component."""

    def _context(component: Component) -> LeafAggregateContext:
        return LeafAggregateContext(leaf=component, measure_repository=repository)

    return _context


@pytest.fixture
def sample_report() -> dict:
    """Project with one module, two directories, production and test files."""
    return {
        "analysis_date": "2026-03-01",
        "root": {
            "key": "acme",
            "name": "Acme",
            "type": "project",
            "children": [
                {
                    "key": "acme:core",
                    "name": "core",
                    "type": "module",
                    "children": [
                        {
                            "key": "acme:core/src",
                            "name": "src",
                            "type": "directory",
                            "children": [
                                {
                                    "key": "acme:core/src/parser.py",
                                    "name": "parser.py",
                                    "type": "file",
                                    "language": "py",
                                    "measures": {
                                        "lines_to_cover": 10,
                                        "uncovered_lines": 3,
                                        "conditions_to_cover": 4,
                                        "uncovered_conditions": 2,
                                    },
                                },
                                {
                                    "key": "acme:core/src/lexer.py",
                                    "name": "lexer.py",
                                    "type": "file",
                                    "language": "py",
                                    "measures": {
                                        "lines_to_cover": 30,
                                        "uncovered_lines": 0,
                                        "conditions_to_cover": 6,
                                        "uncovered_conditions": 6,
                                    },
                                },
                            ],
                        },
                        {
                            "key": "acme:core/tests",
                            "name": "tests",
                            "type": "directory",
                            "children": [
                                {
                                    "key": "acme:core/tests/test_parser.py",
                                    "name": "test_parser.py",
                                    "type": "file",
                                    "unit_test": True,
                                    "measures": {
                                        "lines_to_cover": 50,
                                        "uncovered_lines": 0,
                                    },
                                },
                            ],
                        },
                    ],
                },
            ],
        },
    }


@pytest.fixture
def report_file(tmp_path, sample_report) -> Path:
    path = tmp_path / "report.json"
    path.write_text(json.dumps(sample_report))
    return path
