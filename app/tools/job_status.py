"""Background job status tool."""

from typing import List

from pydantic import BaseModel

from app.jobs.models import JobSnapshot, JobView
from app.tools.base import BaseTool, ToolContext, ToolResult, ToolSpec


class JobStatusArgs(BaseModel):
    pass


def render_snapshot(snap: JobSnapshot, recent: int = 3) -> str:
    """Text report: every active job, plus the last `recent` completed and failed jobs."""
    if snap.is_empty():
        return "No background jobs"

    lines: List[str] = []
    if snap.active:
        lines.append(f"Active jobs ({len(snap.active)}):")
        for job in snap.active:
            lines.append(
                f"- {job.id}: {job.input_ref} ({job.size_display}), running for {job.elapsed_display}"
            )
    else:
        lines.append("No active jobs")

    if snap.completed:
        lines.append("")
        lines.append("Recently completed:")
        lines += [_terminal_line(job) for job in snap.completed[-recent:]]

    if snap.failed:
        lines.append("")
        lines.append("Recently failed:")
        for job in snap.failed[-recent:]:
            lines.append(_terminal_line(job))
            lines.append(f"  Error: {job.failure_detail}")
    return "\n".join(lines)


def _terminal_line(job: JobView) -> str:
    return f"- {job.id}: {job.output_ref} (took {job.elapsed_display})"


class CheckJobStatus(BaseTool):
    def spec(self) -> ToolSpec:
        return ToolSpec(
            name="check_job_status",
            description="Check the status of background video processing jobs",
            args_model=JobStatusArgs,
        )

    async def run(self, args: JobStatusArgs, ctx: ToolContext) -> ToolResult:
        snap = await ctx.jobs.snapshot()
        return ToolResult(render_snapshot(snap, recent=ctx.settings.recent_jobs_display))
