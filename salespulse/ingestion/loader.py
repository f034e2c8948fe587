"""Initial task loading for SalesPulse.

Fetches a JSON array of task records from an http(s) URL or a local
file, normalizes it, and falls back to synthetic data when nothing is
configured, the payload is empty, or loading fails. Failures are
reported in the result, never raised past ``TaskLoader.load``.
"""

import json
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional
import requests

from salespulse.config import Settings
from salespulse.models.task import Task
from salespulse.models.constants import DEFAULT_SEED_TASK_COUNT
from salespulse.ingestion.normalize import normalize_tasks
from salespulse.ingestion.seed import generate_sales_tasks

logger = logging.getLogger(__name__)

SOURCE_REMOTE = "remote"
SOURCE_GENERATED = "generated"


class IngestionError(Exception):
    """Raised when the task source cannot be fetched or parsed."""


@dataclass
class LoadResult:
    """Outcome of the initial load."""
    tasks: List[Task] = field(default_factory=list)
    error: Optional[str] = None
    source: str = SOURCE_GENERATED


class TaskLoader:
    """Loader for the initial task collection."""

    def __init__(
        self,
        source: Optional[str] = None,
        timeout: float = 10.0,
        fallback_count: int = DEFAULT_SEED_TASK_COUNT,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the loader.

        Args:
            source: http(s) URL or path to a JSON file; None means generate data
            timeout: Request timeout in seconds
            fallback_count: Number of synthetic tasks to generate on fallback
            rng: Random source for synthetic data
        """
        self.source = source
        self.timeout = timeout
        self.fallback_count = fallback_count
        self.rng = rng

    @classmethod
    def from_settings(cls, settings: Settings) -> "TaskLoader":
        return cls(
            source=settings.tasks_source_url,
            timeout=settings.fetch_timeout_sec,
            fallback_count=settings.seed_task_count,
        )

    def fetch_raw(self) -> Any:
        """Fetch the raw JSON payload from the configured source.

        Raises:
            IngestionError: If the source cannot be read or is not valid JSON
        """
        if self.source.startswith(("http://", "https://")):
            try:
                response = requests.get(self.source, timeout=self.timeout)
                response.raise_for_status()
                return response.json()
            except (requests.RequestException, ValueError) as e:
                raise IngestionError(f"Failed to load tasks from {self.source}: {e}") from e

        try:
            with Path(self.source).open(encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as e:
            raise IngestionError(f"Failed to load tasks from {self.source}: {e}") from e

    def _fallback(self, now: Optional[datetime], error: Optional[str] = None) -> LoadResult:
        tasks = generate_sales_tasks(self.fallback_count, now=now, rng=self.rng)
        return LoadResult(tasks=tasks, error=error, source=SOURCE_GENERATED)

    def load(self, now: Optional[datetime] = None) -> LoadResult:
        """Load, normalize and fall back as needed. Never raises."""
        if not self.source:
            logger.info("No task source configured, generating sample tasks")
            return self._fallback(now)

        try:
            raw = self.fetch_raw()
        except IngestionError as e:
            logger.warning(f"{e}; using generated tasks")
            return self._fallback(now, error=str(e))

        tasks = normalize_tasks(raw, now=now)
        if not tasks:
            logger.info(f"Task source {self.source} returned no tasks, generating sample tasks")
            return self._fallback(now)
        return LoadResult(tasks=tasks, error=None, source=SOURCE_REMOTE)
