import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from tests.fakes import FakeRunner, succeed


@pytest.fixture
def video_dir(tmp_path):
    (tmp_path / "small.mp4").write_bytes(b"x" * 100)
    (tmp_path / "huge.mp4").write_bytes(b"x" * 5000)
    return tmp_path


@pytest.fixture
def client(video_dir):
    # Anything over 4000 bytes counts as "large"; huge.mp4 never finishes.
    config = Settings(video_base_dir=str(video_dir), large_file_threshold_gb=4000 / 1024 ** 3)
    runner = FakeRunner(lambda cmd: None if "huge.mp4" in cmd else succeed(cmd))
    with TestClient(create_app(config, runner=runner)) as c:
        yield c


def test_health_check(client):
    for path in ("/health", "/api/v1/health"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json()["status"] in ("healthy", "degraded")


def test_list_tools(client):
    response = client.get("/api/v1/tools")
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 7
    names = {t["name"] for t in body["tools"]}
    assert "extract_video_segment" in names
    assert "check_job_status" in names
    assert all("input_schema" in t for t in body["tools"])


def test_call_unknown_tool_returns_404(client):
    response = client.post("/api/v1/tools/rotate_video", json={})
    assert response.status_code == 404
    assert response.json()["detail"] == "Unknown tool: rotate_video"


def test_call_tool_success(client):
    response = client.post("/api/v1/tools/list_video_files", json={})
    assert response.status_code == 200
    body = response.json()
    assert body["is_error"] is False
    assert "huge.mp4" in body["content"][0]["text"]
    assert body["content"][0]["type"] == "text"


def test_call_tool_error_is_a_result(client):
    response = client.post("/api/v1/tools/get_video_info", json={"input_file": "ghost.mp4"})
    assert response.status_code == 200
    body = response.json()
    assert body["is_error"] is True
    assert body["content"][0]["text"].startswith("Error: ")


def test_empty_jobs_snapshot(client):
    response = client.get("/api/v1/jobs")
    assert response.status_code == 200
    assert response.json() == {"active": [], "completed": [], "failed": []}


def test_large_file_job_is_visible_while_running(client):
    response = client.post("/api/v1/tools/extract_video_segment", json={
        "input_file": "huge.mp4",
        "output_file": "cut.mp4",
        "start_time": "00:00:01",
        "end_time": "00:00:02",
    })
    text = response.json()["content"][0]["text"]
    assert "Processing in background" in text

    jobs = client.get("/api/v1/jobs").json()
    assert len(jobs["active"]) == 1
    job = jobs["active"][0]
    assert job["status"] == "processing"
    assert job["ended_at"] is None
    assert job["id"] in text

    single = client.get(f"/api/v1/jobs/{job['id']}")
    assert single.status_code == 200
    assert single.json()["input_ref"].endswith("huge.mp4")

    status_text = client.post("/api/v1/tools/check_job_status", json={}).json()["content"][0]["text"]
    assert "Active jobs (1):" in status_text


def test_small_file_runs_synchronously(client):
    response = client.post("/api/v1/tools/extract_video_segment", json={
        "input_file": "small.mp4",
        "output_file": "cut.mp4",
        "start_time": "00:00:01",
        "end_time": "00:00:02",
    })
    assert response.json()["content"][0]["text"].startswith("Successfully extracted segment")
    assert client.get("/api/v1/jobs").json()["active"] == []


def test_unknown_job_returns_404(client):
    assert client.get("/api/v1/jobs/job_0_nothing").status_code == 404
