from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from ..models import Point, is_number

logger = logging.getLogger(__name__)


class ChartType(str, Enum):
    BAR = "bar"
    PIE = "pie"
    LINE = "line"
    SCATTER = "scatter"
    HISTOGRAM = "histogram"


# Thresholds for the rules below.
HISTOGRAM_MIN_POINTS = 21
HISTOGRAM_MIN_RANGE = 10
PIE_MAX_SLICES = 10
LINE_MIN_POINTS = 4


def _is_scatter(points: Sequence[Point]) -> bool:
    return any(p.has_xy for p in points)


def _is_histogram(points: Sequence[Point]) -> bool:
    values = [p.value for p in points]
    if not all(is_number(v) for v in values):
        return False
    return len(points) >= HISTOGRAM_MIN_POINTS and (max(values) - min(values)) > HISTOGRAM_MIN_RANGE


def _is_pie(points: Sequence[Point]) -> bool:
    return len(points) <= PIE_MAX_SLICES and all(is_number(p.value) and p.value > 0 for p in points)


def _has_sequential_labels(points: Sequence[Point]) -> bool:
    # Plain string comparison: "2024-01" < "2024-02" works, "Oct" < "Nov" doesn't.
    if len(points) < LINE_MIN_POINTS:
        return False
    return all(points[i].label > points[i - 1].label for i in range(1, len(points)))


_RULES = (
    (ChartType.SCATTER, _is_scatter),
    (ChartType.HISTOGRAM, _is_histogram),
    (ChartType.PIE, _is_pie),
    (ChartType.LINE, _has_sequential_labels),
)


def classify(points: Sequence[Point]) -> ChartType:
    """Pick a chart type for `points`.

    Rules are checked in order and the first match wins:
    scatter (any x/y) > histogram (>20 numeric points, range >10)
    > pie (<=10 positive values) > line (>3 strictly increasing labels) > bar.
    Empty input is a bar chart.
    """
    if not points:
        return ChartType.BAR

    for chart_type, rule in _RULES:
        if rule(points):
            logger.debug("classify: %d points -> %s", len(points), chart_type.value)
            return chart_type
    return ChartType.BAR
