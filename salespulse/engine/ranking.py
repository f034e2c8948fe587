"""Stack ranking logic for SalesPulse.

Attaches derived fields (ROI, priority weight) to tasks and sorts them
into a deterministic total order for the dashboard.
"""

from typing import Iterable, List, Sequence, Tuple

from salespulse.models.task import Task, DerivedTask
from salespulse.engine.metrics import compute_roi, compute_priority_weight


def with_derived(task: Task) -> DerivedTask:
    """Project a task into a DerivedTask without touching the original.

    Args:
        task: Task to enrich

    Returns:
        New DerivedTask carrying roi and priority_weight
    """
    return DerivedTask(
        **task.model_dump(exclude={"roi", "priority_weight"}),
        roi=compute_roi(task.revenue, task.time_taken),
        priority_weight=compute_priority_weight(task.priority),
    )


def derive_all(tasks: Iterable[Task]) -> List[DerivedTask]:
    """Derive every task in the collection."""
    return [with_derived(t) for t in tasks]


def sort_tasks(tasks: Sequence[DerivedTask]) -> List[DerivedTask]:
    """Sort derived tasks into a deterministic total order.

    Tasks are sorted:
    1. By ROI, highest first (tasks without ROI go last)
    2. By priority weight, highest first
    3. By creation time, newest first
    4. By title, ascending (case-insensitive, lowercase first on ties)
    5. By id, ascending (same collation)

    The input sequence is not modified. Python's sort is stable, so the
    keys are applied from least to most significant.

    Args:
        tasks: Derived tasks to rank

    Returns:
        New list of tasks in ranked order
    """
    ranked = sorted(tasks, key=lambda t: _collation_key(t.id))
    ranked.sort(key=lambda t: _collation_key(t.title))
    ranked.sort(key=lambda t: t.created_at, reverse=True)
    ranked.sort(key=lambda t: t.priority_weight, reverse=True)
    ranked.sort(key=_roi_sort_key, reverse=True)
    return ranked


def _collation_key(text: str) -> Tuple[str, str]:
    """Get sort key for text: letters compare regardless of case, then
    lowercase before uppercase. Independent of the process locale."""
    text = text or ""
    return (text.casefold(), text.swapcase())


def _roi_sort_key(task: DerivedTask) -> float:
    """Get sort key for ROI; missing ROI sorts below every real value."""
    if task.roi is None:
        return float("-inf")
    return task.roi


def rank_tasks(tasks: Iterable[Task]) -> List[DerivedTask]:
    """Derive and rank a task collection."""
    return sort_tasks(derive_all(tasks))
