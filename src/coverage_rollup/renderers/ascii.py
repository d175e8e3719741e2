"""ASCII tree renderer using Rich for terminal output."""

import io
from typing import Sequence

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from coverage_rollup.component.model import Component, ComponentType
from coverage_rollup.measures.repository import MeasureRepository
from coverage_rollup.renderers.base import CoverageColors, OutputFormat
from coverage_rollup.report.loader import ComponentTree


class ASCIIRenderer:
    """Renders a ComponentTree as ASCII art using Rich."""

    format = OutputFormat.ASCII

    TYPE_SYMBOLS = {
        ComponentType.PROJECT: "◆",
        ComponentType.MODULE: "■",
        ComponentType.DIRECTORY: "▸",
        ComponentType.FILE: "·",
        ComponentType.VIEW: "◇",
        ComponentType.SUBVIEW: "◇",
        ComponentType.PROJECT_VIEW: "◆",
    }

    def render(
        self,
        tree: ComponentTree,
        *,
        metric_keys: Sequence[str],
        depth: int | None = None,
        **options,
    ) -> str:
        """Render the tree as ASCII.

        Args:
            tree: The component tree to render
            metric_keys: Measures to show inline
            depth: Maximum depth to render
            **options: Additional options (width)

        Returns:
            ASCII string representation of the tree
        """
        rich_tree = self._create_rich_tree(
            tree.root,
            tree.measure_repository,
            metric_keys=metric_keys,
            max_depth=depth,
            current_depth=0,
        )

        console = Console(
            file=io.StringIO(),
            force_terminal=True,
            width=options.get("width", 120),
            record=True,
        )
        console.print(rich_tree)

        return console.export_text()

    def _create_rich_tree(
        self,
        node: Component,
        repository: MeasureRepository,
        *,
        metric_keys: Sequence[str],
        max_depth: int | None,
        current_depth: int,
    ) -> Tree:
        rich_tree = Tree(self._build_label(node, repository, metric_keys))

        if max_depth is None or current_depth < max_depth:
            for child in node.children:
                rich_tree.add(
                    self._create_rich_tree(
                        child,
                        repository,
                        metric_keys=metric_keys,
                        max_depth=max_depth,
                        current_depth=current_depth + 1,
                    )
                )
        elif node.children:
            rich_tree.add(Text(f"… {len(node.children)} more", style="dim"))

        return rich_tree

    def _build_label(
        self,
        node: Component,
        repository: MeasureRepository,
        metric_keys: Sequence[str],
    ) -> Text:
        text = Text()
        symbol = self.TYPE_SYMBOLS.get(node.type, "·")
        text.append(f"{symbol} ", style="dim")
        text.append(node.name, style="bold" if not node.type.is_leaf_type else None)

        if node.get_file_attributes().unit_test:
            text.append(" [test]", style="dim cyan")
            return text

        for metric_key in metric_keys:
            measure = repository.get_raw_measure(node, metric_key)
            if measure is None:
                continue
            text.append(f" {metric_key}=", style="dim")
            text.append(f"{measure.value}%", style=CoverageColors.get_color(float(measure.value)))

        return text
