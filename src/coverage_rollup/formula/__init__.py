"""Formulas, their counters and the executor that rolls them up the tree."""

from coverage_rollup.formula.counter import (
    Counter,
    CreateMeasureContext,
    LeafAggregateContext,
)
from coverage_rollup.formula.formula import Formula
from coverage_rollup.formula.executor import (
    ExecutionSummary,
    FormulaExecutor,
    execute_formulas,
)

__all__ = [
    "Counter",
    "CreateMeasureContext",
    "LeafAggregateContext",
    "Formula",
    "ExecutionSummary",
    "FormulaExecutor",
    "execute_formulas",
]
