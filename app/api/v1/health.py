"""Health check endpoint."""

import platform
import shutil
import sys

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Service health, ffmpeg availability, and system info."""
    settings = request.app.state.settings
    ffmpeg = shutil.which(settings.ffmpeg_path)
    ffprobe = shutil.which(settings.ffprobe_path)
    return {
        "status": "healthy" if ffmpeg and ffprobe else "degraded",
        "ffmpeg": ffmpeg,
        "ffprobe": ffprobe,
        "video_base_dir": settings.video_base_dir,
        "python_version": sys.version,
        "platform": platform.platform(),
    }
