"""Task store for SalesPulse."""

from salespulse.store.task_store import TaskStore, clamp_time_taken, clamp_revenue, utcnow

__all__ = ["TaskStore", "clamp_time_taken", "clamp_revenue", "utcnow"]
