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

"""Measures and the in-memory repository holding them per component."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from coverage_rollup.component.model import Component

logger = logging.getLogger(__name__)


class MeasureAlreadyDefinedError(Exception):
    """Raised when a metric is stored twice for the same component."""

    pass


@dataclass(frozen=True)
class Measure:
    metric_key: str
    value: int | float
    data: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"metric": self.metric_key, "value": self.value}
        if self.data is not None:
            result["data"] = self.data
        return result


class MeasureRepository:
    """Stores raw and computed measures keyed by (component key, metric key)."""

    def __init__(self) -> None:
        self._measures: dict[str, dict[str, Measure]] = {}

    def get_raw_measure(self, component: Component, metric_key: str) -> Measure | None:
        return self._measures.get(component.key, {}).get(metric_key)

    def get_measures(self, component: Component) -> dict[str, Measure]:
        return dict(self._measures.get(component.key, {}))

    def add(self, component: Component, measure: Measure) -> None:
        """Store a measure for a component.

        Raises:
            MeasureAlreadyDefinedError: If the metric already has a value
                for this component
        """
        by_metric = self._measures.setdefault(component.key, {})
        if measure.metric_key in by_metric:
            raise MeasureAlreadyDefinedError(
                f"Measure '{measure.metric_key}' already defined "
                f"for component '{component.key}'"
            )
        by_metric[measure.metric_key] = measure
        logger.debug("Stored %s=%s on %s", measure.metric_key, measure.value, component.key)

    def __len__(self) -> int:
        return sum(len(by_metric) for by_metric in self._measures.values())
