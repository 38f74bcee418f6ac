from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Coroutine
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from venue_scraper.schemas.responses import ScrapeRequest, ScrapeResponse

logger = logging.getLogger(__name__)


class JobStatus(StrEnum):
    pending = "pending"
    running = "running"
    completed = "completed"
    failed = "failed"


class Job(BaseModel):
    job_id: str
    status: JobStatus
    created_at: datetime
    started_at: datetime | None = None
    finished_at: datetime | None = None
    url: str
    pages: int | None = None
    output_file: str | None = None
    mode: str = "w"
    result: ScrapeResponse | None = None
    error: str | None = None

    @property
    def finished(self) -> bool:
        return self.status in (JobStatus.completed, JobStatus.failed)


class JobStore:
    """In-memory scrape jobs plus the background tasks running them.

    The store keeps a strong reference to every running task until it is
    done; the event loop only holds weak ones.
    """

    def __init__(self, max_jobs: int = 1000) -> None:
        self._jobs: dict[str, Job] = {}
        self._tasks: dict[str, asyncio.Task] = {}
        self._max_jobs = max_jobs

    def __len__(self) -> int:
        return len(self._jobs)

    def _evict(self) -> None:
        # Only finished jobs go; running scrapes are never dropped.
        finished = sorted(
            (j for j in self._jobs.values() if j.finished),
            key=lambda j: j.created_at,
        )
        while len(self._jobs) > self._max_jobs and finished:
            self._jobs.pop(finished.pop(0).job_id, None)

    def create_job(self, request: ScrapeRequest) -> Job:
        job = Job(
            job_id=uuid.uuid4().hex[:12],
            status=JobStatus.pending,
            created_at=datetime.now(timezone.utc),
            url=request.url,
            pages=request.pages,
            output_file=request.output_file,
            mode=request.mode,
        )
        self._jobs[job.job_id] = job
        self._evict()
        return job

    def get_job(self, job_id: str) -> Job | None:
        return self._jobs.get(job_id)

    def start(self, job_id: str, work: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.create_task(work, name=f"scrape-{job_id}")
        self._tasks[job_id] = task
        task.add_done_callback(lambda _t: self._tasks.pop(job_id, None))
        return task

    @property
    def active_tasks(self) -> int:
        return len(self._tasks)

    async def shutdown(self) -> None:
        """Cancel scrapes still running, e.g. when the HTTP client is closing."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            logger.info("Cancelling %d running scrape jobs", len(tasks))
            await asyncio.gather(*tasks, return_exceptions=True)
        for job_id in [j for j, job in self._jobs.items() if not job.finished]:
            self.mark_failed(job_id, "cancelled at shutdown")

    def mark_running(self, job_id: str) -> None:
        if job := self._jobs.get(job_id):
            job.status = JobStatus.running
            job.started_at = datetime.now(timezone.utc)

    def mark_completed(self, job_id: str, result: ScrapeResponse) -> None:
        if job := self._jobs.get(job_id):
            job.status = JobStatus.completed
            job.result = result
            job.finished_at = datetime.now(timezone.utc)
        self._evict()

    def mark_failed(self, job_id: str, error: str) -> None:
        if job := self._jobs.get(job_id):
            job.status = JobStatus.failed
            job.error = error
            job.finished_at = datetime.now(timezone.utc)
        self._evict()
