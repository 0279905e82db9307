"""Video metadata tool backed by ffprobe."""

import json

from pydantic import BaseModel, Field

from app.media.commands import probe_command
from app.media.probe import parse_probe_output, summarize
from app.tools.base import BaseTool, ToolContext, ToolResult, ToolSpec


class VideoInfoArgs(BaseModel):
    input_file: str = Field(..., min_length=1, description="Path to video file")


class GetVideoInfo(BaseTool):
    def spec(self) -> ToolSpec:
        return ToolSpec(
            name="get_video_info",
            description="Get information about a video file (duration, resolution, etc.)",
            args_model=VideoInfoArgs,
        )

    async def run(self, args: VideoInfoArgs, ctx: ToolContext) -> ToolResult:
        input_path = ctx.workspace.require_file(args.input_file)
        result = await ctx.execute(probe_command(input_path, ffprobe=ctx.settings.ffprobe_path))
        summary = summarize(parse_probe_output(result.stdout), input_path)
        return ToolResult(f"Video Information:\n{json.dumps(summary, indent=2)}")
