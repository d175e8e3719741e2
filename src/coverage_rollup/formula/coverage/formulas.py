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

"""Coverage formulas: percentage of covered elements per component."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable

from coverage_rollup.formula.counter import CreateMeasureContext
from coverage_rollup.formula.coverage.counters import (
    ElementsAndCoveredElementsCounter,
    LinesAndConditionsWithUncoveredCounter,
    LinesAndConditionsWithUncoveredMetricKeys,
    SingleWithUncoveredCounter,
    SingleWithUncoveredMetricKeys,
)
from coverage_rollup.measures.repository import Measure

DEFAULT_DECIMAL_SCALE = 1


class CoverageFamily(str, Enum):
    """Which test run the raw coverage data comes from.

    The value is the metric key prefix of the family.
    """

    UNIT = ""
    IT = "it_"
    OVERALL = "overall_"

    def key(self, metric: str) -> str:
        return f"{self.value}{metric}"


def calculate_coverage(covered_elements: int, elements: int, scale: int = DEFAULT_DECIMAL_SCALE) -> float:
    """Percentage of covered elements, rounded to `scale` decimals.

    Raises:
        ZeroDivisionError: If elements is 0; callers check first
    """
    return round(100.0 * covered_elements / elements, scale)


class CoverageFormula(ABC):
    """Base for formulas that expose covered_elements / elements as a percentage."""

    def __init__(self, family: CoverageFamily = CoverageFamily.UNIT, scale: int = DEFAULT_DECIMAL_SCALE) -> None:
        self.family = family
        self.scale = scale

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    def output_metric_keys(self) -> tuple[str, ...]:
        return (self.name,)

    @abstractmethod
    def create_new_counter(self) -> ElementsAndCoveredElementsCounter:
        ...

    def create_measure(
        self,
        counter: ElementsAndCoveredElementsCounter,
        context: CreateMeasureContext,
    ) -> Measure | None:
        if counter.elements <= 0:
            return None
        return Measure(
            metric_key=context.metric_key,
            value=calculate_coverage(counter.covered_elements, counter.elements, self.scale),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, scale={self.scale})"


class LineCoverageFormula(CoverageFormula):
    @property
    def name(self) -> str:
        return self.family.key("line_coverage")

    def create_new_counter(self) -> SingleWithUncoveredCounter:
        return SingleWithUncoveredCounter(
            SingleWithUncoveredMetricKeys(
                to_cover=self.family.key("lines_to_cover"),
                uncovered=self.family.key("uncovered_lines"),
            )
        )


class BranchCoverageFormula(CoverageFormula):
    @property
    def name(self) -> str:
        return self.family.key("branch_coverage")

    def create_new_counter(self) -> SingleWithUncoveredCounter:
        return SingleWithUncoveredCounter(
            SingleWithUncoveredMetricKeys(
                to_cover=self.family.key("conditions_to_cover"),
                uncovered=self.family.key("uncovered_conditions"),
            )
        )


class CodeCoverageFormula(CoverageFormula):
    """Lines and conditions combined into a single coverage figure."""

    @property
    def name(self) -> str:
        return self.family.key("coverage")

    def create_new_counter(self) -> LinesAndConditionsWithUncoveredCounter:
        return LinesAndConditionsWithUncoveredCounter(
            LinesAndConditionsWithUncoveredMetricKeys(
                lines=self.family.key("lines_to_cover"),
                conditions=self.family.key("conditions_to_cover"),
                uncovered_lines=self.family.key("uncovered_lines"),
                uncovered_conditions=self.family.key("uncovered_conditions"),
            )
        )


def _factory(formula_class: type[CoverageFormula], family: CoverageFamily) -> Callable[[int], CoverageFormula]:
    def create(scale: int = DEFAULT_DECIMAL_SCALE) -> CoverageFormula:
        return formula_class(family, scale)

    return create


def _duplicates(names: list[str] | tuple[str, ...]) -> list[str]:
    seen: set[str] = set()
    duplicates = []
    for name in names:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    return duplicates


# Formula name (= output metric key) -> factory taking the decimal scale
FORMULAS: dict[str, Callable[[int], CoverageFormula]] = {
    formula_class(family).name: _factory(formula_class, family)
    for family in CoverageFamily
    for formula_class in (CodeCoverageFormula, LineCoverageFormula, BranchCoverageFormula)
}


def create_formulas(names: list[str] | tuple[str, ...], scale: int = DEFAULT_DECIMAL_SCALE) -> list[CoverageFormula]:
    """Instantiate formulas by name, in the given order.

    Raises:
        ValueError: If a name is not in FORMULAS or is given twice
    """
    unknown = [name for name in names if name not in FORMULAS]
    if unknown:
        raise ValueError(
            f"Unknown formula(s): {', '.join(unknown)}. "
            f"Valid values: {', '.join(FORMULAS)}"
        )
    duplicates = _duplicates(names)
    if duplicates:
        raise ValueError(f"Formula(s) given more than once: {', '.join(duplicates)}")
    return [FORMULAS[name](scale) for name in names]
