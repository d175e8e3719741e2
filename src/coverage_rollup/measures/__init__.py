"""Measures: metric keys, measure values and their repository."""

from coverage_rollup.measures.repository import (
    Measure,
    MeasureAlreadyDefinedError,
    MeasureRepository,
)

__all__ = [
    "Measure",
    "MeasureAlreadyDefinedError",
    "MeasureRepository",
]
