"""Normalization boundary for loosely-typed task records.

Every defensive check on ingested data lives here, so the analytics
engine and the store can rely on the Task invariants.
"""

import math
import uuid
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

from salespulse.models.task import Task, TaskStatus, TaskPriority, as_utc
from salespulse.models.constants import (
    DEFAULT_REVENUE,
    MIN_TIME_TAKEN_DEFAULT,
    NORMALIZE_BACKDATE_DAYS,
    NORMALIZE_COMPLETION_OFFSET_HOURS,
)
from salespulse.engine.weeks import parse_timestamp

_PRIORITIES = {p.value for p in TaskPriority}
_STATUSES = {s.value for s in TaskStatus}


def _pick(record: Mapping, *keys: str) -> Any:
    """Return the first present, non-None value among keys."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _to_number(value: Any) -> Optional[float]:
    """Coerce numbers and numeric strings; None when not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if not isinstance(value, (str, datetime)):
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        return None


def normalize_task(record: Mapping, index: int, now: datetime) -> Task:
    """Normalize one loose record into a valid Task.

    Args:
        record: Candidate record (camelCase or snake_case keys)
        index: Position in the source array; drives backdated created_at
        now: Reference time for synthesized timestamps

    Returns:
        Task satisfying the store invariants
    """
    created_at = _to_timestamp(_pick(record, "createdAt", "created_at"))
    if created_at is None:
        created_at = now - timedelta(days=NORMALIZE_BACKDATE_DAYS * (index + 1))

    status = _pick(record, "status")
    if not isinstance(status, str) or status not in _STATUSES:
        status = TaskStatus.TODO.value

    priority = _pick(record, "priority")
    if not isinstance(priority, str) or priority not in _PRIORITIES:
        priority = TaskPriority.LOW.value

    completed_at = _to_timestamp(_pick(record, "completedAt", "completed_at"))
    if completed_at is None and status == TaskStatus.DONE.value:
        completed_at = created_at + timedelta(hours=NORMALIZE_COMPLETION_OFFSET_HOURS)

    revenue = _to_number(_pick(record, "revenue"))
    time_taken = _to_number(_pick(record, "timeTaken", "time_taken"))
    if time_taken is None or time_taken <= 0:
        time_taken = MIN_TIME_TAKEN_DEFAULT

    raw_id = _pick(record, "id")
    title = _pick(record, "title")
    notes = _pick(record, "notes")

    return Task(
        id=str(raw_id) if raw_id not in (None, "") else str(uuid.uuid4()),
        title=str(title) if title is not None else "",
        revenue=revenue if revenue is not None else DEFAULT_REVENUE,
        time_taken=time_taken,
        priority=priority,
        status=status,
        notes=str(notes) if notes is not None else None,
        created_at=created_at,
        completed_at=completed_at,
    )


def normalize_tasks(records: Any, now: Optional[datetime] = None) -> List[Task]:
    """Normalize an untyped payload into Tasks.

    Non-list payloads yield no tasks and entries that are not objects are
    skipped. Earlier entries get older synthesized creation times.
    """
    if not isinstance(records, list):
        return []
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    return [
        normalize_task(record, index, now)
        for index, record in enumerate(records)
        if isinstance(record, Mapping)
    ]
