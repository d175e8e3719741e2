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

"""Counter contract and the read-only contexts handed to counters and formulas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

from coverage_rollup.component.model import Component
from coverage_rollup.measures.repository import Measure, MeasureRepository

T_contra = TypeVar("T_contra", contravariant=True)


@dataclass(frozen=True)
class LeafAggregateContext:
    """What a counter sees when it visits one leaf component."""

    leaf: Component
    measure_repository: MeasureRepository

    def get_measure(self, metric_key: str) -> Measure | None:
        return self.measure_repository.get_raw_measure(self.leaf, metric_key)


@dataclass(frozen=True)
class CreateMeasureContext:
    """What a formula sees when it turns a finished counter into a measure."""

    component: Component
    metric_key: str


class Counter(Protocol[T_contra]):
    """Per-node accumulator rolled up through the component tree.

    A counter only merges with counters of its own concrete kind; the
    type parameter lets a type checker reject anything else.
    """

    def aggregate(self, counter: T_contra) -> None:
        """Merge another counter's accumulated state into this one.

        Must be commutative and associative: children are merged in
        whatever order the traversal yields them.
        """
        ...

    def aggregate_leaf(self, context: LeafAggregateContext) -> None:
        """Absorb one leaf's contribution.

        Not idempotent: visiting the same leaf twice counts it twice.
        """
        ...
