"""Task data model for SalesPulse."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


class TaskStatus(str, Enum):
    """Task status enumeration."""
    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class PerformanceGrade(str, Enum):
    """Dashboard performance grade derived from average ROI."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


def enum_to_value(enum_obj: Any) -> Any:
    """Convert enum to its raw value (handles both enum and plain values).

    Models store enum values as strings, while callers may still pass
    enum members; dictionary lookups must use the raw value.
    """
    if isinstance(enum_obj, Enum):
        return enum_obj.value
    return enum_obj


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return a timezone-aware UTC datetime (naive values are read as UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Task(BaseModel):
    """Canonical sales task record."""

    id: str = Field(..., description="Opaque unique task identifier")
    title: str = Field("", description="Free-text label")
    revenue: float = Field(0.0, description="Revenue attributed to the task")
    time_taken: float = Field(1.0, description="Hours spent on the task (kept > 0 by the store)")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(TaskStatus.TODO, description="Task status")
    notes: Optional[str] = Field(None, description="Optional notes")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    completed_at: Optional[datetime] = Field(None, description="First completion timestamp (UTC)")

    @field_validator("created_at", "completed_at")
    @classmethod
    def _normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class DerivedTask(Task):
    """Task enriched with computed-only fields. Never stored."""

    roi: Optional[float] = Field(None, description="revenue / time_taken, 2 decimals")
    priority_weight: int = Field(1, description="High=3, Medium=2, Low=1")


class TaskCreate(BaseModel):
    """Payload for adding a task to the store."""

    id: Optional[str] = None
    title: str = ""
    revenue: float = 0.0
    time_taken: float = 1.0
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None

    @field_validator("completed_at")
    @classmethod
    def _normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class TaskUpdate(BaseModel):
    """Patch payload. Only fields explicitly set are merged."""

    title: Optional[str] = None
    revenue: Optional[float] = None
    time_taken: Optional[float] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None

    @field_validator("completed_at")
    @classmethod
    def _normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class Metrics(BaseModel):
    """Aggregate dashboard metrics recomputed from the full collection."""

    total_revenue: float = 0.0
    total_time_taken: float = 0.0
    time_efficiency_pct: float = 0.0
    revenue_per_hour: float = 0.0
    average_roi: float = 0.0
    performance_grade: PerformanceGrade = PerformanceGrade.NEEDS_IMPROVEMENT

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
