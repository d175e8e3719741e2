"""Metric keys for raw coverage inputs and computed coverage outputs.

Three families share the same shape:
- unit test coverage (no prefix)
- integration test coverage ("it_")
- overall coverage, merging unit and integration runs ("overall_")
"""

from typing import Final

# Unit test coverage
LINES_TO_COVER: Final = "lines_to_cover"
UNCOVERED_LINES: Final = "uncovered_lines"
CONDITIONS_TO_COVER: Final = "conditions_to_cover"
UNCOVERED_CONDITIONS: Final = "uncovered_conditions"
LINE_COVERAGE: Final = "line_coverage"
BRANCH_COVERAGE: Final = "branch_coverage"
COVERAGE: Final = "coverage"

# Integration test coverage
IT_LINES_TO_COVER: Final = "it_lines_to_cover"
IT_UNCOVERED_LINES: Final = "it_uncovered_lines"
IT_CONDITIONS_TO_COVER: Final = "it_conditions_to_cover"
IT_UNCOVERED_CONDITIONS: Final = "it_uncovered_conditions"
IT_LINE_COVERAGE: Final = "it_line_coverage"
IT_BRANCH_COVERAGE: Final = "it_branch_coverage"
IT_COVERAGE: Final = "it_coverage"

# Overall coverage
OVERALL_LINES_TO_COVER: Final = "overall_lines_to_cover"
OVERALL_UNCOVERED_LINES: Final = "overall_uncovered_lines"
OVERALL_CONDITIONS_TO_COVER: Final = "overall_conditions_to_cover"
OVERALL_UNCOVERED_CONDITIONS: Final = "overall_uncovered_conditions"
OVERALL_LINE_COVERAGE: Final = "overall_line_coverage"
OVERALL_BRANCH_COVERAGE: Final = "overall_branch_coverage"
OVERALL_COVERAGE: Final = "overall_coverage"

RAW_METRIC_KEYS: Final[tuple[str, ...]] = (
    LINES_TO_COVER,
    UNCOVERED_LINES,
    CONDITIONS_TO_COVER,
    UNCOVERED_CONDITIONS,
    IT_LINES_TO_COVER,
    IT_UNCOVERED_LINES,
    IT_CONDITIONS_TO_COVER,
    IT_UNCOVERED_CONDITIONS,
    OVERALL_LINES_TO_COVER,
    OVERALL_UNCOVERED_LINES,
    OVERALL_CONDITIONS_TO_COVER,
    OVERALL_UNCOVERED_CONDITIONS,
)

COVERAGE_METRIC_KEYS: Final[tuple[str, ...]] = (
    COVERAGE,
    LINE_COVERAGE,
    BRANCH_COVERAGE,
    IT_COVERAGE,
    IT_LINE_COVERAGE,
    IT_BRANCH_COVERAGE,
    OVERALL_COVERAGE,
    OVERALL_LINE_COVERAGE,
    OVERALL_BRANCH_COVERAGE,
)
