"""Coverage Rollup - bottom-up coverage aggregation over component trees.

Public API:
    - load_report: report file → ComponentTree (components + raw measures)
    - compute_coverage: ComponentTree → ExecutionSummary (measures stored in the tree)
    - render_tree: ComponentTree → str

Example:
    from coverage_rollup import load_report, compute_coverage, render_tree

    tree = load_report(Path("report.json"))
    compute_coverage(tree, ["coverage", "line_coverage"])
    print(render_tree(tree, metric_keys=["coverage", "line_coverage"]))
"""

from typing import Sequence

from coverage_rollup.formula.coverage.formulas import (
    DEFAULT_DECIMAL_SCALE,
    FORMULAS,
    create_formulas,
)
from coverage_rollup.formula.executor import ExecutionSummary, FormulaExecutor
from coverage_rollup.renderers import ASCIIRenderer, JSONRenderer, OutputFormat
from coverage_rollup.report.loader import ComponentTree, ReportLoadError, load_report

__version__ = "0.3.0"


def compute_coverage(
    tree: ComponentTree,
    formula_names: Sequence[str] | None = None,
    *,
    scale: int = DEFAULT_DECIMAL_SCALE,
) -> ExecutionSummary:
    """Run coverage formulas over a loaded tree.

    Args:
        tree: The component tree; computed measures are added to its repository
        formula_names: Names from FORMULAS (None for all of them)
        scale: Decimal places kept in the percentages

    Returns:
        ExecutionSummary for the run
    """
    names = list(formula_names) if formula_names is not None else list(FORMULAS)
    formulas = create_formulas(names, scale)
    executor = FormulaExecutor(tree.measure_repository, formulas)
    return executor.execute(tree.root)


def render_tree(
    tree: ComponentTree,
    *,
    metric_keys: Sequence[str],
    format: OutputFormat = OutputFormat.ASCII,
    depth: int | None = None,
    **options,
) -> str:
    """Render a ComponentTree to the specified format.

    Args:
        tree: The component tree to render
        metric_keys: Measures to show for each node
        format: Output format (ASCII or JSON)
        depth: Maximum tree depth to render
        **options: Format-specific options

    Returns:
        Rendered output
    """
    if format == OutputFormat.JSON:
        renderer = JSONRenderer()
    else:
        renderer = ASCIIRenderer()

    return renderer.render(tree, metric_keys=metric_keys, depth=depth, **options)


__all__ = [
    "__version__",
    "ComponentTree",
    "ExecutionSummary",
    "OutputFormat",
    "ReportLoadError",
    "compute_coverage",
    "load_report",
    "render_tree",
]
