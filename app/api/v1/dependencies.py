"""Request-scoped access to the collaborators wired up in the app lifespan."""

from fastapi import HTTPException, Request

from app.jobs.manager import BackgroundJobManager
from app.tools.base import ToolContext
from app.tools.registry import ToolRegistry


def get_job_manager(request: Request) -> BackgroundJobManager:
    manager = getattr(request.app.state, "jobs", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Job manager not initialized")
    return manager


def get_tool_registry(request: Request) -> ToolRegistry:
    registry = getattr(request.app.state, "tools", None)
    if registry is None:
        raise HTTPException(status_code=503, detail="Tool registry not initialized")
    return registry


def get_tool_context(request: Request) -> ToolContext:
    ctx = getattr(request.app.state, "tool_context", None)
    if ctx is None:
        raise HTTPException(status_code=503, detail="Tool context not initialized")
    return ctx
