"""Coverage counters and formulas."""

from coverage_rollup.formula.coverage.counters import (
    ElementsAndCoveredElementsCounter,
    LinesAndConditionsWithUncoveredCounter,
    LinesAndConditionsWithUncoveredMetricKeys,
    SingleWithUncoveredCounter,
    SingleWithUncoveredMetricKeys,
)
from coverage_rollup.formula.coverage.formulas import (
    FORMULAS,
    BranchCoverageFormula,
    CodeCoverageFormula,
    CoverageFamily,
    CoverageFormula,
    LineCoverageFormula,
    calculate_coverage,
    create_formulas,
)

__all__ = [
    "ElementsAndCoveredElementsCounter",
    "SingleWithUncoveredCounter",
    "SingleWithUncoveredMetricKeys",
    "LinesAndConditionsWithUncoveredCounter",
    "LinesAndConditionsWithUncoveredMetricKeys",
    "FORMULAS",
    "CoverageFamily",
    "CoverageFormula",
    "LineCoverageFormula",
    "BranchCoverageFormula",
    "CodeCoverageFormula",
    "calculate_coverage",
    "create_formulas",
]
