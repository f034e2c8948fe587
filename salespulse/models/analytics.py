"""Aggregate analytics result models for SalesPulse."""

from typing import Dict, List
from pydantic import BaseModel, Field

from salespulse.models.task import TaskPriority


class FunnelCounts(BaseModel):
    """Status counts and conversion ratios across Todo -> In Progress -> Done."""
    todo: int = 0
    in_progress: int = 0
    done: int = 0
    conversion_todo_to_in_progress: float = 0.0
    conversion_in_progress_to_done: float = 0.0


class VelocityStats(BaseModel):
    """Days from creation to completion for one priority bucket."""
    avg_days: float = 0.0
    median_days: int = 0


class WeeklyThroughput(BaseModel):
    """Completed tasks and revenue for one ISO week."""
    week: str = Field(..., description="ISO week key, e.g. 2024-W07")
    count: int = 0
    revenue: float = 0.0


class ForecastPoint(BaseModel):
    """Projected weekly revenue, labelled +1..+N."""
    week: str
    revenue: float


class CohortRevenue(BaseModel):
    """Revenue of tasks created in one ISO week at one priority."""
    week: str
    priority: TaskPriority
    revenue: float = 0.0

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class DashboardAnalytics(BaseModel):
    """Bundle of every aggregate analytic shown on the dashboard."""
    funnel: FunnelCounts
    velocity: Dict[str, VelocityStats]
    throughput: List[WeeklyThroughput]
    weighted_pipeline: float
    forecast: List[ForecastPoint]
    cohorts: List[CohortRevenue]
