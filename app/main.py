"""FFmpeg video editor service - FastAPI application."""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI

from app.api.v1.health import router as health_root_router
from app.api.v1.router import v1_router
from app.config import Settings, settings
from app.jobs.manager import BackgroundJobManager
from app.jobs.runner import ProcessRunner, ShellProcessRunner
from app.storage.workspace import VideoWorkspace
from app.tools.base import ToolContext
from app.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def create_app(
    config: Settings = settings,
    runner: Optional[ProcessRunner] = None,
) -> FastAPI:
    """Build the application. `runner` replaces the shell runner (tests use a fake)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown logic."""
        process_runner = runner or ShellProcessRunner()
        workspace = VideoWorkspace(config.video_base_dir)
        logger.info("Starting video editor service on port %d", config.port)
        logger.info("Video base dir: %s", workspace.base_dir)

        jobs = BackgroundJobManager(
            process_runner,
            retention=timedelta(minutes=config.job_retention_minutes),
        )
        await jobs.start()

        tools = ToolRegistry()
        tools.discover()
        logger.info("Found %d tool(s)", len(tools.list_tools()))

        app.state.jobs = jobs
        app.state.tools = tools
        app.state.tool_context = ToolContext(
            settings=config,
            workspace=workspace,
            runner=process_runner,
            jobs=jobs,
        )

        yield

        logger.info("Shutting down video editor service")
        await jobs.stop()

    app = FastAPI(
        title="FFmpeg Video Editor",
        description="Video editing tools backed by ffmpeg, with background jobs for large files",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = config

    app.include_router(health_root_router, tags=["health"])  # GET /health at root
    app.include_router(v1_router)  # All /api/v1/* endpoints
    return app


logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="127.0.0.1", port=settings.port)
