"""Playback speed tool."""

from pydantic import BaseModel, Field

from app.jobs.models import ExecutionMode
from app.media.commands import change_speed_command
from app.tools.base import BaseTool, ToolContext, ToolResult, ToolSpec


class ChangeSpeedArgs(BaseModel):
    input_file: str = Field(..., min_length=1, description="Path to input video file")
    output_file: str = Field(..., min_length=1, description="Path for output video file")
    speed: float = Field(
        ...,
        ge=0.1,
        le=100,
        description="Speed multiplier (e.g., 2.0 for 2x speed, 0.5 for half speed, 50 for 50x speed)",
    )


def describe_speed(speed: float) -> str:
    if speed > 1:
        return f"{speed:g}x faster (audio removed)"
    return f"{speed:g}x speed (audio preserved)"


class ChangeVideoSpeed(BaseTool):
    def spec(self) -> ToolSpec:
        return ToolSpec(
            name="change_video_speed",
            description="Change the playback speed of a video (1x to 50x+). Audio is removed for speeds > 1x",
            args_model=ChangeSpeedArgs,
        )

    async def run(self, args: ChangeSpeedArgs, ctx: ToolContext) -> ToolResult:
        input_path = ctx.workspace.require_file(args.input_file)
        output_path = ctx.workspace.resolve(args.output_file)
        size_gb = ctx.workspace.size_gb(input_path)
        command = change_speed_command(
            input_path, output_path, args.speed, ffmpeg=ctx.settings.ffmpeg_path
        )

        if ctx.classify(size_gb) == ExecutionMode.BACKGROUND:
            return await ctx.submit_background(
                input_path, output_path, command, size_gb, speed_factor=args.speed
            )

        result = await ctx.execute(command)
        return ToolResult(
            f"Successfully changed video speed to {describe_speed(args.speed)}\n"
            f"Output: {output_path}\n\n"
            f"FFmpeg output: {result.stderr}"
        )
