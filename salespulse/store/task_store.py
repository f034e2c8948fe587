"""In-memory task store for SalesPulse.

The store is the single owner of the canonical task collection. The
collection is held as a tuple that is replaced on every mutation; derived
views (ranking, metrics, analytics) are memoized on the identity of that
tuple and recomputed only when it changes.

Mutations are synchronous and not thread-safe: callers run them on one
thread (the API applies ingestion results on its event loop).
"""

import logging
import math
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from salespulse.models.task import (
    Task,
    TaskCreate,
    TaskUpdate,
    DerivedTask,
    Metrics,
    TaskStatus,
    as_utc,
)
from salespulse.models.analytics import DashboardAnalytics
from salespulse.models.constants import (
    MIN_TIME_TAKEN_DEFAULT,
    DEFAULT_REVENUE,
    DEFAULT_FORECAST_HORIZON_WEEKS,
)
from salespulse.engine.metrics import compute_metrics
from salespulse.engine.ranking import rank_tasks
from salespulse.engine.analytics import compute_analytics
from salespulse.ingestion.loader import LoadResult, TaskLoader

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Fields a patch may explicitly clear
_NULLABLE_FIELDS = ("notes", "completed_at")


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def clamp_time_taken(value: Any) -> float:
    """Return value if it is a finite positive number, else the default (1)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return MIN_TIME_TAKEN_DEFAULT
    if not math.isfinite(value) or value <= 0:
        return MIN_TIME_TAKEN_DEFAULT
    return float(value)


def clamp_revenue(value: Any) -> float:
    """Return value if it is a finite number, else 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_REVENUE
    if not math.isfinite(value):
        return DEFAULT_REVENUE
    return float(value)


class _Memo:
    """Single-slot cache keyed on the identity of the task collection."""

    def __init__(self) -> None:
        self._key: Optional[Tuple[Task, ...]] = None
        self._values: Dict[Any, Any] = {}

    def get(self, collection: Tuple[Task, ...], name: Any, compute: Callable[[], Any]) -> Any:
        if self._key is not collection:
            self._key = collection
            self._values = {}
        if name not in self._values:
            self._values[name] = compute()
        return self._values[name]


class TaskStore:
    """Owner of the canonical task collection."""

    def __init__(
        self,
        tasks: Optional[List[Task]] = None,
        clock: Optional[Clock] = None,
    ):
        self._tasks: Tuple[Task, ...] = tuple(tasks or ())
        self._clock: Clock = clock or utcnow
        self._last_deleted: Optional[Task] = None
        self._loading = False
        self._error: Optional[str] = None
        self._memo = _Memo()

    def _now(self, now: Optional[datetime]) -> datetime:
        return as_utc(now) if now is not None else as_utc(self._clock())

    # ---- read side ----

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Canonical collection in insertion order."""
        return self._tasks

    @property
    def last_deleted(self) -> Optional[Task]:
        """Most recently deleted task, if it can still be restored."""
        return self._last_deleted

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def derived_sorted(self) -> Tuple[DerivedTask, ...]:
        """Derived tasks in ranked order."""
        return self._memo.get(self._tasks, "derived_sorted", lambda: tuple(rank_tasks(self._tasks)))

    @property
    def metrics(self) -> Metrics:
        return self._memo.get(self._tasks, "metrics", lambda: compute_metrics(self._tasks))

    def analytics(self, horizon_weeks: int = DEFAULT_FORECAST_HORIZON_WEEKS) -> DashboardAnalytics:
        """Aggregate analytics, memoized per forecast horizon."""
        return self._memo.get(
            self._tasks,
            ("analytics", horizon_weeks),
            lambda: compute_analytics(self._tasks, horizon_weeks),
        )

    def get(self, task_id: str) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- mutations ----

    def add(self, task: Union[TaskCreate, Mapping], now: Optional[datetime] = None) -> Task:
        """Create a task and append it to the collection.

        The id is generated when absent, time_taken is clamped to a
        positive value and created_at is stamped with the current time.
        A task created as Done is completed now unless completed_at was
        supplied.

        Args:
            task: Task payload (TaskCreate or mapping of its fields)
            now: Current time override (defaults to the store clock)

        Returns:
            The stored Task
        """
        if not isinstance(task, TaskCreate):
            task = TaskCreate(**task)
        created_at = self._now(now)
        completed_at = None
        if task.status == TaskStatus.DONE:
            completed_at = task.completed_at or created_at

        stored = Task(
            id=task.id or str(uuid.uuid4()),
            title=task.title,
            revenue=clamp_revenue(task.revenue),
            time_taken=clamp_time_taken(task.time_taken),
            priority=task.priority,
            status=task.status,
            notes=task.notes,
            created_at=created_at,
            completed_at=completed_at,
        )
        self._tasks = self._tasks + (stored,)
        logger.debug(f"Added task {stored.id}: {stored.title[:50]}")
        return stored

    def update(
        self,
        task_id: str,
        patch: Union[TaskUpdate, Mapping],
        now: Optional[datetime] = None,
    ) -> Optional[Task]:
        """Merge a patch onto the task with the given id.

        Only fields set in the patch are applied; id and created_at never
        change. The first move into Done stamps completed_at unless the
        patch carries one. Unknown ids are ignored.

        Returns:
            The updated Task, or None if no task matched
        """
        if isinstance(patch, TaskUpdate):
            changes = patch.model_dump(exclude_unset=True)
        else:
            changes = TaskUpdate(**patch).model_dump(exclude_unset=True)
        changes = {k: v for k, v in changes.items() if v is not None or k in _NULLABLE_FIELDS}

        updated: Optional[Task] = None
        next_tasks: List[Task] = []
        for current in self._tasks:
            if current.id != task_id or updated is not None:
                next_tasks.append(current)
                continue
            merged = current.model_copy(update=changes)
            fixes: Dict[str, Any] = {
                "time_taken": clamp_time_taken(merged.time_taken),
                "revenue": clamp_revenue(merged.revenue),
            }
            if (
                current.status != TaskStatus.DONE
                and merged.status == TaskStatus.DONE
                and merged.completed_at is None
            ):
                fixes["completed_at"] = self._now(now)
            updated = merged.model_copy(update=fixes)
            next_tasks.append(updated)

        if updated is None:
            logger.debug(f"Update ignored, task {task_id} not found")
            return None
        self._tasks = tuple(next_tasks)
        logger.debug(f"Updated task {task_id}: {sorted(changes)}")
        return updated

    def delete(self, task_id: str) -> None:
        """Remove a task and keep it as the single undo candidate."""
        target = self.get(task_id)
        if target is None:
            logger.debug(f"Delete ignored, task {task_id} not found")
            return
        self._tasks = tuple(t for t in self._tasks if t is not target)
        self._last_deleted = target
        logger.debug(f"Deleted task {task_id}")

    def undo_delete(self) -> None:
        """Re-append the last deleted task (at the end) and clear the buffer."""
        if self._last_deleted is None:
            return
        restored = self._last_deleted
        self._tasks = self._tasks + (restored,)
        self._last_deleted = None
        logger.debug(f"Restored task {restored.id}")

    def dismiss_last_deleted(self) -> None:
        """Drop the undo buffer without restoring anything."""
        self._last_deleted = None

    # ---- ingestion ----

    def begin_loading(self) -> None:
        self._loading = True
        self._error = None

    def complete_loading(self, result: LoadResult) -> None:
        """Apply a LoadResult: loaded tasks go ahead of tasks added meanwhile."""
        self._tasks = tuple(result.tasks) + self._tasks
        self._error = result.error
        self._loading = False
        logger.info(f"Loaded {len(result.tasks)} tasks from {result.source}")

    def load(self, loader: TaskLoader) -> None:
        """Run a loader synchronously and apply its result."""
        self.begin_loading()
        self.complete_loading(loader.load())
