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

"""Formula executor - rolls counters up the component tree, bottom-up."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from coverage_rollup.component.model import Component
from coverage_rollup.formula.counter import CreateMeasureContext, LeafAggregateContext
from coverage_rollup.formula.formula import Formula
from coverage_rollup.measures.repository import MeasureRepository

logger = logging.getLogger(__name__)


@dataclass
class ExecutionSummary:
    nodes_visited: int = 0
    leaves_visited: int = 0
    measures_created: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "nodes_visited": self.nodes_visited,
            "leaves_visited": self.leaves_visited,
            "measures_created": self.measures_created,
        }


class FormulaExecutor:
    """Runs several formulas over a component tree in a single traversal.

    Every node gets its own counter for each formula. Leaves feed their
    counters from raw measures; every other node merges its children's
    counters, one child at a time. Once a node's counters are final the
    formulas turn them into measures stored in the repository.
    """

    def __init__(self, measure_repository: MeasureRepository, formulas: Sequence[Formula[Any]]) -> None:
        self.measure_repository = measure_repository
        self.formulas = list(formulas)

    def execute(self, root: Component) -> ExecutionSummary:
        """Compute all formulas for every node under (and including) root.

        Args:
            root: The top of the tree to process

        Returns:
            Counts of visited nodes and created measures
        """
        summary = ExecutionSummary()
        if not self.formulas:
            logger.warning("No formulas to execute")
            return summary

        self._visit(root, summary)
        logger.info(
            "Executed %d formula(s) on %s: %d nodes, %d leaves, %d measures",
            len(self.formulas),
            root.key,
            summary.nodes_visited,
            summary.leaves_visited,
            summary.measures_created,
        )
        return summary

    def _visit(self, node: Component, summary: ExecutionSummary) -> list[Any]:
        """Post-order visit; returns this node's counters, one per formula."""
        counters = [formula.create_new_counter() for formula in self.formulas]
        summary.nodes_visited += 1

        if node.type.is_leaf_type:
            if node.children:
                logger.warning(
                    "Ignoring %d children of leaf component %s", len(node.children), node.key
                )
            context = LeafAggregateContext(leaf=node, measure_repository=self.measure_repository)
            for counter in counters:
                counter.aggregate_leaf(context)
            summary.leaves_visited += 1
        else:
            for child in node.children:
                child_counters = self._visit(child, summary)
                for counter, child_counter in zip(counters, child_counters):
                    counter.aggregate(child_counter)

        logger.debug("Aggregated %s %s: %s", node.type.value, node.key, counters)
        summary.measures_created += self._create_measures(node, counters)
        return counters

    def _create_measures(self, node: Component, counters: list[Any]) -> int:
        created = 0
        for formula, counter in zip(self.formulas, counters):
            for metric_key in formula.output_metric_keys:
                context = CreateMeasureContext(component=node, metric_key=metric_key)
                measure = formula.create_measure(counter, context)
                if measure is not None:
                    self.measure_repository.add(node, measure)
                    created += 1
        return created


def execute_formulas(
    root: Component,
    measure_repository: MeasureRepository,
    formulas: Sequence[Formula[Any]],
) -> ExecutionSummary:
    """Convenience function to run formulas over a tree.

    Args:
        root: Root component of the tree
        measure_repository: Holds raw inputs; receives computed measures
        formulas: Formulas to compute

    Returns:
        ExecutionSummary for the run
    """
    executor = FormulaExecutor(measure_repository, formulas)
    return executor.execute(root)
