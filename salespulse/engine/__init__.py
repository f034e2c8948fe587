"""Analytics engine for SalesPulse."""

from salespulse.engine.metrics import (
    compute_roi,
    compute_priority_weight,
    compute_total_revenue,
    compute_total_time_taken,
    compute_time_efficiency,
    compute_revenue_per_hour,
    compute_average_roi,
    compute_performance_grade,
    compute_metrics,
)
from salespulse.engine.ranking import with_derived, derive_all, sort_tasks, rank_tasks
from salespulse.engine.weeks import days_between, iso_week_key
from salespulse.engine.analytics import (
    compute_funnel,
    compute_velocity_by_priority,
    compute_throughput_by_week,
    compute_weighted_pipeline,
    compute_forecast,
    compute_cohort_revenue,
    compute_analytics,
)

__all__ = [
    "compute_roi",
    "compute_priority_weight",
    "compute_total_revenue",
    "compute_total_time_taken",
    "compute_time_efficiency",
    "compute_revenue_per_hour",
    "compute_average_roi",
    "compute_performance_grade",
    "compute_metrics",
    "with_derived",
    "derive_all",
    "sort_tasks",
    "rank_tasks",
    "days_between",
    "iso_week_key",
    "compute_funnel",
    "compute_velocity_by_priority",
    "compute_throughput_by_week",
    "compute_weighted_pipeline",
    "compute_forecast",
    "compute_cohort_revenue",
    "compute_analytics",
]
