"""In-process background job manager using asyncio.

Large media operations are started as external processes and tracked here
until they exit. Process exits are published as messages on an asyncio queue
and applied to the registry by a single consumer, so every registry mutation
happens on the event loop.

Known gaps: there is no cap on concurrently running processes, no timeout
and no cancellation. A hung ffmpeg leaves its job in PROCESSING.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Set, Tuple

from app.jobs.dispatcher import JobDispatcher
from app.jobs.models import (
    TERMINAL_STATUSES,
    JobRecord,
    JobSnapshot,
    JobStatus,
    JobView,
    ProcessResult,
)
from app.jobs.policy import format_elapsed, format_size_gb, make_job_id
from app.jobs.runner import ProcessLaunchError, ProcessRunner

logger = logging.getLogger(__name__)

DEFAULT_RETENTION = timedelta(hours=1)

ExitMessage = Tuple[str, ProcessResult]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BackgroundJobManager(JobDispatcher):
    """Owns the job registry and every transition of the jobs in it."""

    def __init__(
        self,
        runner: ProcessRunner,
        retention: timedelta = DEFAULT_RETENTION,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        runner: starts the external processes; swap in a fake for tests.
        retention: how long COMPLETED/FAILED jobs stay visible after they end.
        clock: returns the current (timezone-aware) time.
        """
        self._runner = runner
        self._retention = retention
        self._clock = clock
        self._jobs: Dict[str, JobRecord] = {}
        self._exits: "asyncio.Queue[ExitMessage]" = asyncio.Queue()
        self._process_tasks: Set[asyncio.Task] = set()
        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def retention(self) -> timedelta:
        return self._retention

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: str) -> bool:
        return job_id in self._jobs

    async def submit(
        self, input_ref: str, output_ref: str, command: str, size_gb: float
    ) -> str:
        if not command or not command.strip():
            raise ValueError("command must be a non-empty invocation string")
        if not input_ref or not output_ref:
            raise ValueError("input_ref and output_ref are required")

        started_at = self._clock()
        job_id = self._unique_id(make_job_id(input_ref, started_at))
        self._jobs[job_id] = JobRecord(
            id=job_id,
            input_ref=input_ref,
            output_ref=output_ref,
            command=command,
            size_gb=size_gb,
            started_at=started_at,
        )

        task = asyncio.create_task(self._execute(job_id, command))
        self._process_tasks.add(task)
        task.add_done_callback(self._process_tasks.discard)

        logger.info("Submitted background job %s (%.2f GB): %s", job_id, size_gb, input_ref)
        return job_id

    def on_process_exit(self, job_id: str, result: ProcessResult) -> None:
        """Apply a process exit to its job. Jobs already evicted are ignored."""
        job = self._jobs.get(job_id)
        if job is None:
            logger.debug("Exit for unknown or evicted job %s ignored", job_id)
            return
        if job.status in TERMINAL_STATUSES:
            return

        ended_at = self._clock()
        if result.ok:
            update = {"status": JobStatus.COMPLETED, "ended_at": ended_at}
            logger.info("Job %s completed", job_id)
        else:
            update = {
                "status": JobStatus.FAILED,
                "ended_at": ended_at,
                "failure_detail": result.error_text,
            }
            logger.warning("Job %s failed: %s", job_id, result.error_text)

        # Replace the record in one step so readers never see a partial update.
        self._jobs[job_id] = job.model_copy(update=update)

    async def snapshot(self) -> JobSnapshot:
        self._apply_pending_exits()
        now = self._clock()
        self.evict_expired(now)

        snap = JobSnapshot()
        buckets = {
            JobStatus.PROCESSING: snap.active,
            JobStatus.COMPLETED: snap.completed,
            JobStatus.FAILED: snap.failed,
        }
        for job in list(self._jobs.values()):
            buckets[job.status].append(self._view(job, now))
        return snap

    def get_view(self, job_id: str) -> Optional[JobView]:
        job = self._jobs.get(job_id)
        if job is None:
            return None
        return self._view(job, self._clock())

    def evict_expired(self, now: Optional[datetime] = None) -> int:
        """Drop terminal jobs that ended more than `retention` ago. Returns count removed."""
        now = now or self._clock()
        expired = [
            job_id
            for job_id, job in self._jobs.items()
            if job.status in TERMINAL_STATUSES
            and job.ended_at is not None
            and now - job.ended_at > self._retention
        ]
        for job_id in expired:
            del self._jobs[job_id]
        if expired:
            logger.info("Evicted %d expired job(s)", len(expired))
        return len(expired)

    async def start(self) -> None:
        self._running = True
        self._task = asyncio.create_task(self._completion_loop())

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        # Only the waiter tasks are cancelled; the external processes keep running.
        waiters = list(self._process_tasks)
        for task in waiters:
            task.cancel()
        await asyncio.gather(*waiters, return_exceptions=True)
        self._apply_pending_exits()

    async def _execute(self, job_id: str, command: str) -> None:
        """Run one job's process and publish its exit."""
        try:
            handle = await self._runner.spawn(command)
        except Exception as exc:
            detail = str(exc) if isinstance(exc, ProcessLaunchError) else f"{type(exc).__name__}: {exc}"
            await self._exits.put((job_id, ProcessResult(returncode=-1, stderr=detail)))
            return

        job = self._jobs.get(job_id)
        if job is not None:
            job.process_handle = handle

        try:
            result = await self._runner.wait(handle)
        except Exception as exc:
            result = ProcessResult(returncode=-1, stderr=f"{type(exc).__name__}: {exc}")
        await self._exits.put((job_id, result))

    async def _completion_loop(self) -> None:
        """Apply process exits as they arrive."""
        while self._running:
            try:
                job_id, result = await asyncio.wait_for(self._exits.get(), timeout=1.0)
            except asyncio.TimeoutError:
                continue
            except asyncio.CancelledError:
                break
            self.on_process_exit(job_id, result)

    def _apply_pending_exits(self) -> None:
        while True:
            try:
                job_id, result = self._exits.get_nowait()
            except asyncio.QueueEmpty:
                return
            self.on_process_exit(job_id, result)

    def _unique_id(self, job_id: str) -> str:
        candidate = job_id
        n = 2
        while candidate in self._jobs:
            candidate = f"{job_id}-{n}"
            n += 1
        return candidate

    def _view(self, job: JobRecord, now: datetime) -> JobView:
        elapsed = ((job.ended_at or now) - job.started_at).total_seconds()
        return JobView(
            id=job.id,
            status=job.status,
            input_ref=job.input_ref,
            output_ref=job.output_ref,
            size_gb=job.size_gb,
            size_display=format_size_gb(job.size_gb),
            elapsed_seconds=elapsed,
            elapsed_display=format_elapsed(elapsed),
            started_at=job.started_at,
            ended_at=job.ended_at,
            failure_detail=job.failure_detail,
        )
