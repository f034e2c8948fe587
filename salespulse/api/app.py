"""FastAPI web application for SalesPulse.

Exposes the task store to a dashboard view: the canonical collection,
the ranked derived tasks, metrics, analytics, the undo buffer, the
loading/error flags, and the five store mutations.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import List, Optional
from fastapi import Depends, FastAPI, Query
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from salespulse import __version__
from salespulse.config import get_settings
from salespulse.models.task import Task, TaskCreate, TaskUpdate, DerivedTask, Metrics
from salespulse.models.analytics import DashboardAnalytics
from salespulse.ingestion.loader import TaskLoader
from salespulse.store.task_store import TaskStore

logger = logging.getLogger(__name__)

settings = get_settings()

# In-memory storage; all state is lost on restart
task_store = TaskStore()


def get_store() -> TaskStore:
    """Dependency returning the application task store."""
    return task_store


async def _initial_load(store: TaskStore, loader: TaskLoader) -> None:
    # Fetch off the event loop, apply on it so mutations stay single-threaded
    result = await run_in_threadpool(loader.load)
    store.complete_loading(result)


@asynccontextmanager
async def lifespan(app: FastAPI):
    load_task: Optional[asyncio.Task] = None
    if settings.load_on_startup:
        task_store.begin_loading()
        load_task = asyncio.create_task(_initial_load(task_store, TaskLoader.from_settings(settings)))
    yield
    if load_task is not None and not load_task.done():
        # Late results are discarded
        load_task.cancel()


app = FastAPI(
    title="SalesPulse API",
    description="In-memory sales task tracking with ROI ranking and dashboard analytics",
    version=__version__,
    lifespan=lifespan,
)


# Response models
class DashboardResponse(BaseModel):
    """Everything a dashboard view renders."""
    loading: bool
    error: Optional[str]
    last_deleted: Optional[Task]
    metrics: Metrics
    tasks: List[DerivedTask]


def _snapshot(store: TaskStore) -> DashboardResponse:
    return DashboardResponse(
        loading=store.loading,
        error=store.error,
        last_deleted=store.last_deleted,
        metrics=store.metrics,
        tasks=list(store.derived_sorted),
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/dashboard", response_model=DashboardResponse)
async def dashboard(store: TaskStore = Depends(get_store)):
    """Dashboard snapshot: flags, undo buffer, metrics and ranked tasks."""
    return _snapshot(store)


@app.get("/tasks", response_model=List[Task])
async def list_tasks(store: TaskStore = Depends(get_store)):
    """Canonical task collection in insertion order."""
    return list(store.tasks)


@app.get("/tasks/ranked", response_model=List[DerivedTask])
async def ranked_tasks(store: TaskStore = Depends(get_store)):
    """Tasks with ROI and priority weight, in ranked order."""
    return list(store.derived_sorted)


@app.get("/metrics", response_model=Metrics)
async def metrics(store: TaskStore = Depends(get_store)):
    return store.metrics


@app.get("/analytics", response_model=DashboardAnalytics)
async def analytics(
    horizon_weeks: int = Query(settings.forecast_horizon_weeks, ge=1, le=52),
    store: TaskStore = Depends(get_store),
):
    """Funnel, velocity, throughput, pipeline, forecast and cohorts."""
    return store.analytics(horizon_weeks)


@app.post("/tasks", response_model=DashboardResponse, status_code=201)
async def create_task(payload: TaskCreate, store: TaskStore = Depends(get_store)):
    store.add(payload)
    return _snapshot(store)


@app.patch("/tasks/{task_id}", response_model=DashboardResponse)
async def update_task(task_id: str, patch: TaskUpdate, store: TaskStore = Depends(get_store)):
    """Patch a task. Unknown ids are ignored."""
    store.update(task_id, patch)
    return _snapshot(store)


@app.delete("/tasks/{task_id}", response_model=DashboardResponse)
async def delete_task(task_id: str, store: TaskStore = Depends(get_store)):
    """Delete a task, keeping it restorable until the next delete or dismiss."""
    store.delete(task_id)
    return _snapshot(store)


@app.post("/tasks/undo", response_model=DashboardResponse)
async def undo_delete(store: TaskStore = Depends(get_store)):
    store.undo_delete()
    return _snapshot(store)


@app.post("/tasks/dismiss-undo", response_model=DashboardResponse)
async def dismiss_undo(store: TaskStore = Depends(get_store)):
    store.dismiss_last_deleted()
    return _snapshot(store)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)
