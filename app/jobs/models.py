"""Job record data models for background media processing."""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATUSES = (JobStatus.COMPLETED, JobStatus.FAILED)


class ExecutionMode(str, Enum):
    IMMEDIATE = "immediate"
    BACKGROUND = "background"


class ProcessResult(BaseModel):
    """Outcome of one external process invocation."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        text = self.stderr.strip() or self.stdout.strip()
        return text or f"Process exited with code {self.returncode}"


class JobRecord(BaseModel):
    """Tracks the lifecycle of one background ffmpeg invocation."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    status: JobStatus = JobStatus.PROCESSING
    input_ref: str
    output_ref: str
    command: str
    size_gb: float
    started_at: datetime
    ended_at: Optional[datetime] = None
    failure_detail: Optional[str] = None
    # Kept only so the process stays reachable; never signalled.
    process_handle: Any = Field(default=None, exclude=True, repr=False)


class JobView(BaseModel):
    """Point-in-time projection of a JobRecord with derived display fields."""
    id: str
    status: JobStatus
    input_ref: str
    output_ref: str
    size_gb: float
    size_display: str
    elapsed_seconds: float
    elapsed_display: str
    started_at: datetime
    ended_at: Optional[datetime] = None
    failure_detail: Optional[str] = None


class JobSnapshot(BaseModel):
    active: List[JobView] = Field(default_factory=list)
    completed: List[JobView] = Field(default_factory=list)
    failed: List[JobView] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.active or self.completed or self.failed)
