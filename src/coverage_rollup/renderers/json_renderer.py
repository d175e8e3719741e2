"""JSON renderer for component trees."""

import json
from typing import Any, Sequence

from coverage_rollup.component.model import Component
from coverage_rollup.measures.repository import MeasureRepository
from coverage_rollup.renderers.base import OutputFormat
from coverage_rollup.report.loader import ComponentTree


class JSONRenderer:
    """Renders a ComponentTree and its measures as JSON."""

    format = OutputFormat.JSON

    def render(
        self,
        tree: ComponentTree,
        *,
        metric_keys: Sequence[str],
        depth: int | None = None,
        **options,
    ) -> str:
        """Render the tree as JSON.

        Args:
            tree: The component tree to render
            metric_keys: Measures to include for each node
            depth: Maximum depth to render
            **options: Additional options (indent)

        Returns:
            JSON string representation of the tree
        """
        data: dict[str, Any] = {
            "root": self._node_to_dict(
                tree.root,
                tree.measure_repository,
                metric_keys,
                max_depth=depth,
                current_depth=0,
            ),
        }
        if tree.analysis_date:
            data["analysis_date"] = tree.analysis_date

        indent = options.get("indent", 2)
        return json.dumps(data, indent=indent, default=str)

    def _node_to_dict(
        self,
        node: Component,
        repository: MeasureRepository,
        metric_keys: Sequence[str],
        *,
        max_depth: int | None,
        current_depth: int,
    ) -> dict[str, Any]:
        result = node.to_dict(include_children=False)

        measures = {}
        for metric_key in metric_keys:
            measure = repository.get_raw_measure(node, metric_key)
            if measure is not None:
                measures[metric_key] = measure.value
        result["measures"] = measures

        if not node.children:
            return result

        if max_depth is not None and current_depth >= max_depth:
            result["children_count"] = len(node.children)
            result["children_truncated"] = True
            return result

        result["children"] = [
            self._node_to_dict(
                child,
                repository,
                metric_keys,
                max_depth=max_depth,
                current_depth=current_depth + 1,
            )
            for child in node.children
        ]
        return result
