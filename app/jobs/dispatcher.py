"""Job dispatcher interface for background media jobs."""

from abc import ABC, abstractmethod

from app.jobs.models import JobSnapshot


class JobDispatcher(ABC):
    """Abstract interface for background job tracking."""

    @abstractmethod
    async def submit(
        self, input_ref: str, output_ref: str, command: str, size_gb: float
    ) -> str:
        """Start a command in the background. Returns job_id immediately."""
        ...

    @abstractmethod
    async def snapshot(self) -> JobSnapshot:
        """Evict expired terminal jobs, then return all remaining jobs by status."""
        ...

    @abstractmethod
    async def start(self) -> None:
        """Start the dispatcher (e.g., start the completion loop)."""
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Stop the dispatcher gracefully."""
        ...
