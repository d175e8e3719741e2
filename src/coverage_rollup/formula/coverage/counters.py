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

"""Counters for measures built from a count of elements and covered elements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from coverage_rollup.formula.counter import LeafAggregateContext


@dataclass(frozen=True)
class SingleWithUncoveredMetricKeys:
    """Raw metrics for one kind of element: how many, and how many uncovered."""

    to_cover: str
    uncovered: str


@dataclass(frozen=True)
class LinesAndConditionsWithUncoveredMetricKeys:
    lines: str
    conditions: str
    uncovered_lines: str
    uncovered_conditions: str


class ElementsAndCoveredElementsCounter(ABC):
    """Counter for measures based on a count of elements and covered elements.

    Unit test files never contribute: a report-type leaf flagged as a unit
    test is skipped before the subclass sees it. Subclasses only decide
    which raw measures make up the elements and covered elements of a leaf.
    """

    def __init__(self) -> None:
        self.elements = 0
        self.covered_elements = 0

    def aggregate(self, counter: ElementsAndCoveredElementsCounter) -> None:
        self.elements += counter.elements
        self.covered_elements += counter.covered_elements

    def aggregate_leaf(self, context: LeafAggregateContext) -> None:
        component = context.leaf
        if component.type.is_report_type and component.get_file_attributes().unit_test:
            return
        self._aggregate_for_supported_leaf(context)

    @abstractmethod
    def _aggregate_for_supported_leaf(self, context: LeafAggregateContext) -> None:
        """Add the leaf's elements and covered elements to the totals."""
        ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(elements={self.elements}, "
            f"covered_elements={self.covered_elements})"
        )


def _value(context: LeafAggregateContext, metric_key: str) -> int:
    """Integer value of a raw measure; a missing measure counts as 0."""
    measure = context.get_measure(metric_key)
    if measure is None:
        return 0
    return int(measure.value)


def _to_cover_and_covered(to_cover: int, uncovered: int) -> tuple[int, int]:
    # Keeps covered_elements <= elements whatever the raw data says
    to_cover = max(to_cover, 0)
    uncovered = min(max(uncovered, 0), to_cover)
    return to_cover, to_cover - uncovered


class SingleWithUncoveredCounter(ElementsAndCoveredElementsCounter):
    """Elements are e.g. lines to cover; covered ones are those not uncovered."""

    def __init__(self, metric_keys: SingleWithUncoveredMetricKeys) -> None:
        super().__init__()
        self.metric_keys = metric_keys

    def _aggregate_for_supported_leaf(self, context: LeafAggregateContext) -> None:
        elements, covered = _to_cover_and_covered(
            _value(context, self.metric_keys.to_cover),
            _value(context, self.metric_keys.uncovered),
        )
        self.elements += elements
        self.covered_elements += covered


class LinesAndConditionsWithUncoveredCounter(ElementsAndCoveredElementsCounter):
    """Lines and conditions counted together, for the combined coverage measure."""

    def __init__(self, metric_keys: LinesAndConditionsWithUncoveredMetricKeys) -> None:
        super().__init__()
        self.metric_keys = metric_keys

    def _aggregate_for_supported_leaf(self, context: LeafAggregateContext) -> None:
        lines, covered_lines = _to_cover_and_covered(
            _value(context, self.metric_keys.lines),
            _value(context, self.metric_keys.uncovered_lines),
        )
        conditions, covered_conditions = _to_cover_and_covered(
            _value(context, self.metric_keys.conditions),
            _value(context, self.metric_keys.uncovered_conditions),
        )
        self.elements += lines + conditions
        self.covered_elements += covered_lines + covered_conditions
