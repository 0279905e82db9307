"""Segment extraction tool (stream copy between two timestamps)."""

from pydantic import BaseModel, Field

from app.jobs.models import ExecutionMode, ProcessResult
from app.media.commands import extract_segment_command
from app.tools.base import BaseTool, ToolContext, ToolResult, ToolSpec


class ExtractSegmentArgs(BaseModel):
    input_file: str = Field(..., min_length=1, description="Path to input video file")
    output_file: str = Field(..., min_length=1, description="Path for output video file")
    start_time: str = Field(..., min_length=1, description="Start timestamp (format: HH:MM:SS or MM:SS)")
    end_time: str = Field(..., min_length=1, description="End timestamp (format: HH:MM:SS or MM:SS)")


async def extract_segment(
    ctx: ToolContext, input_path: str, output_path: str, start_time: str, end_time: str
) -> ProcessResult:
    """Extract synchronously. Paths must already be resolved."""
    command = extract_segment_command(
        input_path, output_path, start_time, end_time, ffmpeg=ctx.settings.ffmpeg_path
    )
    return await ctx.execute(command)


class ExtractVideoSegment(BaseTool):
    def spec(self) -> ToolSpec:
        return ToolSpec(
            name="extract_video_segment",
            description="Extract a segment from a video file using start and end timestamps",
            args_model=ExtractSegmentArgs,
        )

    async def run(self, args: ExtractSegmentArgs, ctx: ToolContext) -> ToolResult:
        input_path = ctx.workspace.require_file(args.input_file)
        output_path = ctx.workspace.resolve(args.output_file)
        size_gb = ctx.workspace.size_gb(input_path)

        if ctx.classify(size_gb) == ExecutionMode.BACKGROUND:
            command = extract_segment_command(
                input_path, output_path, args.start_time, args.end_time,
                ffmpeg=ctx.settings.ffmpeg_path,
            )
            return await ctx.submit_background(input_path, output_path, command, size_gb)

        result = await extract_segment(ctx, input_path, output_path, args.start_time, args.end_time)
        return ToolResult(
            f"Successfully extracted segment from {args.start_time} to {args.end_time}\n"
            f"Output: {output_path}\n\n"
            f"FFmpeg output: {result.stderr}"
        )
