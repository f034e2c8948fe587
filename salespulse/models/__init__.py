"""Data models for SalesPulse."""

from salespulse.models.task import (
    Task,
    TaskCreate,
    TaskUpdate,
    DerivedTask,
    Metrics,
    TaskStatus,
    TaskPriority,
    PerformanceGrade,
)
from salespulse.models.analytics import (
    FunnelCounts,
    VelocityStats,
    WeeklyThroughput,
    ForecastPoint,
    CohortRevenue,
    DashboardAnalytics,
)

__all__ = [
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "DerivedTask",
    "Metrics",
    "TaskStatus",
    "TaskPriority",
    "PerformanceGrade",
    "FunnelCounts",
    "VelocityStats",
    "WeeklyThroughput",
    "ForecastPoint",
    "CohortRevenue",
    "DashboardAnalytics",
]
