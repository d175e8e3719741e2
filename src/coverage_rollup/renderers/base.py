"""Base renderer and output format definitions."""

from enum import Enum
from typing import Protocol, Sequence

from coverage_rollup.report.loader import ComponentTree


class OutputFormat(str, Enum):
    """Output format for rendering."""

    ASCII = "ascii"
    JSON = "json"


class CoverageColors:
    """Rich color names for coverage percentages."""

    GRADIENT = [
        (50.0, "red"),
        (65.0, "orange3"),
        (80.0, "yellow"),
        (95.0, "bright_green"),
    ]
    TOP = "green"

    @classmethod
    def get_color(cls, percentage: float) -> str:
        for threshold, color in cls.GRADIENT:
            if percentage < threshold:
                return color
        return cls.TOP


class TreeRenderer(Protocol):
    """Protocol for component tree renderers."""

    format: OutputFormat

    def render(
        self,
        tree: ComponentTree,
        *,
        metric_keys: Sequence[str],
        depth: int | None = None,
        **options,
    ) -> str:
        """Render the tree with the given measures.

        Args:
            tree: The loaded component tree (measures already computed)
            metric_keys: Measures to show for each node, in order
            depth: Maximum depth to render (None for unlimited)
            **options: Additional format-specific options

        Returns:
            Rendered output
        """
        ...
