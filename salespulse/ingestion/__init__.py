"""Ingestion adapter: loads, normalizes and seeds the initial tasks."""

from salespulse.ingestion.normalize import normalize_task, normalize_tasks
from salespulse.ingestion.seed import generate_sales_tasks
from salespulse.ingestion.loader import TaskLoader, LoadResult, IngestionError

__all__ = [
    "normalize_task",
    "normalize_tasks",
    "generate_sales_tasks",
    "TaskLoader",
    "LoadResult",
    "IngestionError",
]
