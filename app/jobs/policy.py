"""Pure policy helpers for background jobs: classification, estimates, display."""

import os
import re
from datetime import datetime

from app.jobs.models import ExecutionMode

BYTES_PER_GB = 1024 ** 3
DEFAULT_THRESHOLD_GB = 1.0
DEFAULT_MINUTES_PER_GB = 3.0

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]
_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def classify(size_gb: float, threshold_gb: float = DEFAULT_THRESHOLD_GB) -> ExecutionMode:
    """Decide whether work on an input of `size_gb` should run in the background.

    Inputs at or above the threshold go to the background so the caller is not
    held past its request timeout.
    """
    if size_gb >= threshold_gb:
        return ExecutionMode.BACKGROUND
    return ExecutionMode.IMMEDIATE


def estimate_duration(
    size_gb: float,
    speed_factor: float = 1.0,
    minutes_per_gb: float = DEFAULT_MINUTES_PER_GB,
) -> str:
    """Rough processing-time estimate for submission messages.

    The speed factor is accepted but does not affect the estimate.
    """
    minutes = int(round(size_gb * minutes_per_gb))
    if minutes < 60:
        return f"~{minutes} minutes"
    hours, mins = divmod(minutes, 60)
    return f"~{hours}h {mins}m"


def format_size(num_bytes: float) -> str:
    size = float(num_bytes)
    for unit in _SIZE_UNITS:
        if size < 1024 or unit == _SIZE_UNITS[-1]:
            if unit == "B":
                return f"{int(size)} B"
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} TB"


def format_size_gb(size_gb: float) -> str:
    return format_size(size_gb * BYTES_PER_GB)


def format_elapsed(seconds: float) -> str:
    total = max(0, int(seconds))
    if total < 60:
        return f"{total}s"
    minutes, secs = divmod(total, 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m"


def make_job_id(input_ref: str, created_at: datetime) -> str:
    """Compose a job id from the input name and creation time (millisecond resolution)."""
    stem = os.path.splitext(os.path.basename(input_ref))[0] or "job"
    stem = _UNSAFE_ID_CHARS.sub("_", stem)
    return f"job_{int(created_at.timestamp() * 1000)}_{stem}"
