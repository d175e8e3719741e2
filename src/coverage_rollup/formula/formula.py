"""Formula contract: creates counters and turns them into measures."""

from __future__ import annotations

from typing import Protocol, TypeVar

from coverage_rollup.formula.counter import CreateMeasureContext
from coverage_rollup.measures.repository import Measure

C = TypeVar("C")


class Formula(Protocol[C]):
    """A metric computed by rolling counters up the component tree."""

    name: str
    output_metric_keys: tuple[str, ...]

    def create_new_counter(self) -> C:
        """Return a fresh, empty counter for one node."""
        ...

    def create_measure(self, counter: C, context: CreateMeasureContext) -> Measure | None:
        """Build the output measure for a node, or None when there is nothing to report."""
        ...
