# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Report loader - builds a component tree and its raw measures from a file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from coverage_rollup.component.model import Component, ComponentType, FileAttributes
from coverage_rollup.measures.metrics import COVERAGE_METRIC_KEYS, RAW_METRIC_KEYS
from coverage_rollup.measures.repository import Measure, MeasureRepository
from coverage_rollup.report.schemas import ComponentSchema, ReportSchema

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class ReportLoadError(Exception):
    """Raised when a report file cannot be read, parsed or validated."""

    pass


@dataclass
class ComponentTree:
    """A loaded report: the component tree plus raw measures per component."""

    root: Component
    measure_repository: MeasureRepository
    analysis_date: str | None = None

    def iter_nodes(self) -> list[Component]:
        return self.root.iter_nodes()

    def find(self, key: str) -> Component | None:
        for node in self.iter_nodes():
            if node.key == key:
                return node
        return None


class TreeBuilder:
    """Converts a validated ReportSchema into a ComponentTree."""

    def __init__(self) -> None:
        self._seen_keys: set[str] = set()
        self._repository = MeasureRepository()

    def build(self, report: ReportSchema) -> ComponentTree:
        root = self._build_node(report.root)
        return ComponentTree(
            root=root,
            measure_repository=self._repository,
            analysis_date=report.analysis_date,
        )

    def _build_node(self, schema: ComponentSchema) -> Component:
        if schema.key in self._seen_keys:
            raise ReportLoadError(f"Duplicate component key: {schema.key}")
        self._seen_keys.add(schema.key)

        component = Component(
            key=schema.key,
            name=schema.name or schema.key,
            type=schema.type,
            file_attributes=self._file_attributes(schema),
        )

        for metric_key, value in schema.measures.items():
            if metric_key in COVERAGE_METRIC_KEYS:
                raise ReportLoadError(
                    f"Measure '{metric_key}' on '{schema.key}' is computed, not an input"
                )
            if metric_key not in RAW_METRIC_KEYS:
                logger.warning("Ignoring unknown measure '%s' on %s", metric_key, schema.key)
                continue
            self._repository.add(component, Measure(metric_key=metric_key, value=value))

        for child_schema in schema.children:
            component.add_child(self._build_node(child_schema))

        return component

    def _file_attributes(self, schema: ComponentSchema) -> FileAttributes | None:
        if schema.type != ComponentType.FILE:
            if schema.unit_test is not None:
                raise ReportLoadError(
                    f"'unit_test' is only allowed on file components, "
                    f"got it on {schema.type.value} '{schema.key}'"
                )
            return None
        return FileAttributes(
            unit_test=bool(schema.unit_test),
            language_key=schema.language,
        )


def build_component_tree(data: dict[str, Any]) -> ComponentTree:
    """Validate raw report data and build a ComponentTree from it.

    Raises:
        ReportLoadError: If the data does not match the report schema
    """
    try:
        report = ReportSchema.model_validate(data)
    except ValidationError as e:
        raise ReportLoadError(f"Invalid report: {e}") from e
    tree = TreeBuilder().build(report)
    logger.info(
        "Loaded report: %d components, %d raw measures",
        len(tree.iter_nodes()),
        len(tree.measure_repository),
    )
    return tree


def load_report(path: Path) -> ComponentTree:
    """Load a JSON or YAML report file.

    Args:
        path: Path to the report (.json, .yaml or .yml)

    Returns:
        ComponentTree with raw measures

    Raises:
        ReportLoadError: If file cannot be read, parsed or validated
    """
    try:
        content = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ReportLoadError(f"Error reading {path}: {e}") from e

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ReportLoadError(f"Invalid YAML in {path}: {e}") from e
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ReportLoadError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ReportLoadError(f"Report {path} must contain a mapping at top level")

    logger.debug("Parsed report file %s", path)
    return build_component_tree(data)
