"""Aggregate analytics for SalesPulse.

Funnel conversion, delivery velocity, weekly throughput, weighted
pipeline, a linear revenue forecast and cohort revenue. All functions
are pure and tolerate empty input.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Sequence, Tuple

from salespulse.models.task import Task, TaskStatus, TaskPriority, enum_to_value
from salespulse.models.analytics import (
    FunnelCounts,
    VelocityStats,
    WeeklyThroughput,
    ForecastPoint,
    CohortRevenue,
    DashboardAnalytics,
)
from salespulse.models.constants import PIPELINE_STATUS_WEIGHTS, DEFAULT_FORECAST_HORIZON_WEEKS
from salespulse.engine.weeks import days_between, iso_week_key


def compute_funnel(tasks: Sequence[Task]) -> FunnelCounts:
    """Count tasks per status and derive stage conversion ratios."""
    todo = sum(1 for t in tasks if t.status == TaskStatus.TODO)
    in_progress = sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS)
    done = sum(1 for t in tasks if t.status == TaskStatus.DONE)
    base = todo + in_progress + done
    return FunnelCounts(
        todo=todo,
        in_progress=in_progress,
        done=done,
        conversion_todo_to_in_progress=(in_progress + done) / base if base else 0.0,
        conversion_in_progress_to_done=done / in_progress if in_progress else 0.0,
    )


def compute_velocity_by_priority(tasks: Sequence[Task]) -> Dict[str, VelocityStats]:
    """Average and median days-to-complete per priority.

    Only tasks with a completion timestamp count. The median is the lower
    median: element ``n // 2`` of the ascending list.
    """
    groups: Dict[str, List[int]] = {p.value: [] for p in TaskPriority}
    for t in tasks:
        if t.completed_at is None:
            continue
        bucket = groups.get(enum_to_value(t.priority))
        if bucket is not None:
            bucket.append(days_between(t.created_at, t.completed_at))

    stats: Dict[str, VelocityStats] = {}
    for priority, days in groups.items():
        if not days:
            stats[priority] = VelocityStats()
            continue
        days.sort()
        stats[priority] = VelocityStats(
            avg_days=sum(days) / len(days),
            median_days=days[len(days) // 2],
        )
    return stats


def compute_throughput_by_week(tasks: Sequence[Task]) -> List[WeeklyThroughput]:
    """Completed task count and revenue per ISO week of completion."""
    by_week: Dict[str, WeeklyThroughput] = {}
    for t in tasks:
        if t.completed_at is None:
            continue
        week = iso_week_key(t.completed_at)
        row = by_week.setdefault(week, WeeklyThroughput(week=week))
        row.count += 1
        row.revenue += t.revenue
    return [by_week[week] for week in sorted(by_week)]


def compute_weighted_pipeline(tasks: Sequence[Task]) -> float:
    """Revenue weighted by how far each task has progressed."""
    return sum(
        (t.revenue * PIPELINE_STATUS_WEIGHTS.get(enum_to_value(t.status), 0.0) for t in tasks),
        0.0,
    )


def _revenue_of(point: Any) -> float:
    if isinstance(point, Mapping):
        return float(point["revenue"])
    return float(point.revenue)


def compute_forecast(
    weekly: Sequence[Any],
    horizon_weeks: int = DEFAULT_FORECAST_HORIZON_WEEKS,
) -> List[ForecastPoint]:
    """Project weekly revenue with an ordinary least-squares line.

    Revenue is regressed on the 0-based position in the series, not on
    calendar distance between weeks.

    Args:
        weekly: Weekly series (WeeklyThroughput models or mappings with "revenue")
        horizon_weeks: Number of weeks to project past the last point

    Returns:
        Points labelled "+1".."+N" with non-negative revenue; empty when
        fewer than two points are available
    """
    if len(weekly) < 2:
        return []
    ys = [_revenue_of(p) for p in weekly]
    xs = list(range(len(ys)))
    n = len(xs)
    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_xx = sum(x * x for x in xs)
    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        denominator = 1
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    last_index = xs[-1]
    forecast: List[ForecastPoint] = []
    for step in range(1, horizon_weeks + 1):
        idx = last_index + step
        forecast.append(ForecastPoint(week=f"+{step}", revenue=max(0.0, slope * idx + intercept)))
    return forecast


def compute_cohort_revenue(tasks: Sequence[Task]) -> List[CohortRevenue]:
    """Revenue grouped by creation week and priority, ascending by week."""
    by_key: Dict[Tuple[str, str], float] = {}
    for t in tasks:
        key = (iso_week_key(t.created_at), enum_to_value(t.priority))
        by_key[key] = by_key.get(key, 0.0) + t.revenue
    rows = [
        CohortRevenue(week=week, priority=priority, revenue=revenue)
        for (week, priority), revenue in by_key.items()
    ]
    # Stable sort keeps insertion order among priorities of the same week
    rows.sort(key=lambda r: r.week)
    return rows


def compute_analytics(
    tasks: Sequence[Task],
    horizon_weeks: int = DEFAULT_FORECAST_HORIZON_WEEKS,
) -> DashboardAnalytics:
    """Compute every aggregate analytic for the dashboard."""
    throughput = compute_throughput_by_week(tasks)
    return DashboardAnalytics(
        funnel=compute_funnel(tasks),
        velocity=compute_velocity_by_priority(tasks),
        throughput=throughput,
        weighted_pipeline=compute_weighted_pipeline(tasks),
        forecast=compute_forecast(throughput, horizon_weeks),
        cohorts=compute_cohort_revenue(tasks),
    )
