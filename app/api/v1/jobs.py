"""Background jobs API — poll the job registry."""

from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.dependencies import get_job_manager
from app.jobs.manager import BackgroundJobManager

router = APIRouter()


@router.get("/jobs")
async def list_jobs(manager: BackgroundJobManager = Depends(get_job_manager)):
    """All tracked jobs grouped by status. Expired finished jobs are evicted first."""
    snap = await manager.snapshot()
    return snap.model_dump(mode="json")


@router.get("/jobs/{job_id}")
async def get_job(job_id: str, manager: BackgroundJobManager = Depends(get_job_manager)):
    view = manager.get_view(job_id)
    if view is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return view.model_dump(mode="json")
