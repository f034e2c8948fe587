"""Metric functions for SalesPulse.

Pure functions computing one derived value from a task or a task
collection. Every function is total: bad numeric input and empty
collections degrade to None or 0 instead of raising.
"""

import math
from numbers import Real
from typing import Any, Iterable, Optional, Sequence

from salespulse.models.task import Task, TaskStatus, Metrics, PerformanceGrade, enum_to_value
from salespulse.models.constants import (
    GRADE_EXCELLENT_ABOVE,
    GRADE_GOOD_FROM,
    PRIORITY_WEIGHTS,
    DEFAULT_PRIORITY_WEIGHT,
    ROI_DECIMALS,
)


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def round_half_up(value: float, decimals: int = ROI_DECIMALS) -> float:
    """Round half toward +infinity at the given number of decimals."""
    scale = 10 ** decimals
    scaled = value * scale
    if not math.isfinite(scaled):
        return scaled
    return math.floor(scaled + 0.5) / scale


def compute_roi(revenue: Any, time_taken: Any) -> Optional[float]:
    """Compute ROI as revenue per unit of time, rounded to 2 decimals.

    Args:
        revenue: Task revenue
        time_taken: Time spent on the task

    Returns:
        Rounded ROI, or None if either input is not a finite number,
        time_taken is not positive, or the result is not finite
    """
    if not _is_finite_number(revenue):
        return None
    if not _is_finite_number(time_taken) or time_taken <= 0:
        return None
    value = revenue / time_taken
    if not math.isfinite(value):
        return None
    rounded = round_half_up(value)
    if not math.isfinite(rounded):
        return None
    return rounded


def compute_priority_weight(priority: Any) -> int:
    """Map a priority to its ranking weight (High=3, Medium=2, otherwise 1)."""
    try:
        return PRIORITY_WEIGHTS.get(enum_to_value(priority), DEFAULT_PRIORITY_WEIGHT)
    except TypeError:
        # Unhashable input
        return DEFAULT_PRIORITY_WEIGHT


def _is_done(task: Task) -> bool:
    return task.status == TaskStatus.DONE


def compute_total_revenue(tasks: Iterable[Task]) -> float:
    """Sum revenue over Done tasks."""
    return sum((t.revenue for t in tasks if _is_done(t)), 0.0)


def compute_total_time_taken(tasks: Iterable[Task]) -> float:
    """Sum time taken over all tasks."""
    return sum((t.time_taken for t in tasks), 0.0)


def compute_time_efficiency(tasks: Sequence[Task]) -> float:
    """Percentage of tasks that are Done (0 for an empty collection)."""
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if _is_done(t))
    return done / len(tasks) * 100


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    """Done revenue divided by total time taken (0 if no time recorded)."""
    revenue = compute_total_revenue(tasks)
    time = compute_total_time_taken(tasks)
    return revenue / time if time > 0 else 0.0


def compute_average_roi(tasks: Iterable[Task]) -> float:
    """Mean of the per-task ROI values, skipping tasks without a valid ROI."""
    rois = [roi for roi in (compute_roi(t.revenue, t.time_taken) for t in tasks) if roi is not None]
    if not rois:
        return 0.0
    return sum(rois) / len(rois)


def compute_performance_grade(avg_roi: float) -> str:
    """Grade the average ROI against fixed policy thresholds."""
    if avg_roi > GRADE_EXCELLENT_ABOVE:
        return PerformanceGrade.EXCELLENT.value
    if avg_roi >= GRADE_GOOD_FROM:
        return PerformanceGrade.GOOD.value
    return PerformanceGrade.NEEDS_IMPROVEMENT.value


def compute_metrics(tasks: Sequence[Task]) -> Metrics:
    """Compute the dashboard metric bundle for a task collection."""
    if not tasks:
        return Metrics()
    average_roi = compute_average_roi(tasks)
    return Metrics(
        total_revenue=compute_total_revenue(tasks),
        total_time_taken=compute_total_time_taken(tasks),
        time_efficiency_pct=compute_time_efficiency(tasks),
        revenue_per_hour=compute_revenue_per_hour(tasks),
        average_roi=average_roi,
        performance_grade=compute_performance_grade(average_roi),
    )
