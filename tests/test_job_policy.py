from datetime import datetime, timezone

import pytest

from app.jobs.models import ExecutionMode
from app.jobs.policy import (
    BYTES_PER_GB,
    classify,
    estimate_duration,
    format_elapsed,
    format_size,
    format_size_gb,
    make_job_id,
)


@pytest.mark.parametrize(
    "size_gb, expected",
    [
        (0.0, ExecutionMode.IMMEDIATE),
        (0.999, ExecutionMode.IMMEDIATE),
        (1.0, ExecutionMode.BACKGROUND),
        (7.3, ExecutionMode.BACKGROUND),
    ],
)
def test_classify_threshold_boundary(size_gb, expected):
    assert classify(size_gb) == expected


def test_classify_custom_threshold():
    assert classify(0.5, threshold_gb=0.25) == ExecutionMode.BACKGROUND
    assert classify(0.5, threshold_gb=2.0) == ExecutionMode.IMMEDIATE


def test_estimate_under_an_hour():
    assert estimate_duration(10) == "~30 minutes"


def test_estimate_over_an_hour():
    assert estimate_duration(30) == "~1h 30m"
    assert estimate_duration(20) == "~1h 0m"


def test_estimate_ignores_speed_factor():
    # The speed factor is accepted but not part of the formula. Kept as-is until
    # the intended behaviour for fast-forwarded output is decided.
    assert estimate_duration(10, speed_factor=50) == estimate_duration(10, speed_factor=0.5)
    assert estimate_duration(30, speed_factor=8) == "~1h 30m"


def test_format_size():
    assert format_size(512) == "512 B"
    assert format_size(1536) == "1.50 KB"
    assert format_size(5 * 1024 * 1024) == "5.00 MB"
    assert format_size(1.5 * BYTES_PER_GB) == "1.50 GB"
    assert format_size_gb(2) == "2.00 GB"


def test_format_elapsed():
    assert format_elapsed(5.9) == "5s"
    assert format_elapsed(125) == "2m 5s"
    assert format_elapsed(3725) == "1h 2m"
    assert format_elapsed(-3) == "0s"


def test_job_id_embeds_input_name_and_time():
    created = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
    job_id = make_job_id("/videos/My Clip (final).mp4", created)
    assert job_id == f"job_{int(created.timestamp() * 1000)}_My_Clip_final_"
