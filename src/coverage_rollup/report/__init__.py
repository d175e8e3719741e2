"""Loading analysis reports into component trees."""

from coverage_rollup.report.loader import (
    ComponentTree,
    ReportLoadError,
    TreeBuilder,
    build_component_tree,
    load_report,
)
from coverage_rollup.report.schemas import ComponentSchema, ReportSchema

__all__ = [
    "ComponentTree",
    "ReportLoadError",
    "TreeBuilder",
    "build_component_tree",
    "load_report",
    "ComponentSchema",
    "ReportSchema",
]
