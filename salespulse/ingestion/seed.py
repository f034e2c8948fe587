"""Synthetic sales task generator.

Used when no task source is configured or the source cannot be loaded.
Every generated record satisfies the store invariants: positive
time_taken, non-negative revenue, and completed_at present exactly for
Done tasks, never before created_at or after now.
"""

import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from salespulse.models.task import Task, TaskStatus, TaskPriority, as_utc
from salespulse.models.constants import DEFAULT_SEED_TASK_COUNT

ACTIONS = [
    "Follow up with",
    "Send proposal to",
    "Demo for",
    "Negotiate renewal with",
    "Discovery call with",
    "Prepare quote for",
    "Close deal with",
    "Onboard",
]

ACCOUNTS = [
    "Acme Corp",
    "Globex",
    "Initech",
    "Umbrella Health",
    "Stark Industries",
    "Wayne Enterprises",
    "Hooli",
    "Soylent Foods",
    "Wonka Industries",
    "Tyrell Systems",
]

NOTES = [
    None,
    "Decision maker looped in",
    "Waiting on procurement",
    "Asked for volume discount",
    "Champion changed roles",
]

# Created within the last N days
CREATED_WINDOW_DAYS = 90
MAX_COMPLETION_DAYS = 21


def generate_sales_task(rng: random.Random, now: datetime) -> Task:
    """Generate one plausible sales task."""
    created_at = now - timedelta(
        days=rng.randint(1, CREATED_WINDOW_DAYS),
        hours=rng.randint(0, 23),
        minutes=rng.randint(0, 59),
    )
    status = rng.choices(
        [TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE],
        weights=[3, 3, 4],
    )[0]
    completed_at = None
    if status == TaskStatus.DONE:
        completed_at = min(now, created_at + timedelta(days=rng.randint(0, MAX_COMPLETION_DAYS), hours=rng.randint(1, 12)))

    return Task(
        id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
        title=f"{rng.choice(ACTIONS)} {rng.choice(ACCOUNTS)}",
        revenue=float(rng.randrange(500, 50000, 50)),
        time_taken=float(rng.randint(1, 40)),
        priority=rng.choice(list(TaskPriority)),
        status=status,
        notes=rng.choice(NOTES),
        created_at=created_at,
        completed_at=completed_at,
    )


def generate_sales_tasks(
    count: int = DEFAULT_SEED_TASK_COUNT,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[Task]:
    """Generate a batch of synthetic sales tasks.

    Args:
        count: Number of tasks to generate
        now: Reference time (defaults to current UTC time)
        rng: Random source; pass a seeded Random for reproducible data

    Returns:
        List of generated tasks
    """
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    rng = rng or random.Random()
    return [generate_sales_task(rng, now) for _ in range(max(0, count))]
