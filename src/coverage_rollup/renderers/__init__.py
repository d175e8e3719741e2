"""Renderers for component trees with coverage measures."""

from coverage_rollup.renderers.base import CoverageColors, OutputFormat, TreeRenderer
from coverage_rollup.renderers.ascii import ASCIIRenderer
from coverage_rollup.renderers.json_renderer import JSONRenderer

__all__ = [
    "OutputFormat",
    "TreeRenderer",
    "CoverageColors",
    "ASCIIRenderer",
    "JSONRenderer",
]
