"""Concatenation tool using the ffmpeg concat demuxer."""

from typing import List

from pydantic import BaseModel, Field

from app.jobs.models import ProcessResult
from app.media.commands import concat_command, concat_list_contents
from app.tools.base import BaseTool, ToolContext, ToolResult, ToolSpec


class ConcatenateArgs(BaseModel):
    input_files: List[str] = Field(..., min_length=1, description="Array of input video file paths in order")
    output_file: str = Field(..., min_length=1, description="Path for final concatenated video")


async def concatenate(ctx: ToolContext, input_paths: List[str], output_path: str) -> ProcessResult:
    """Write a temporary concat list, run ffmpeg, and always remove the list."""
    list_path = ctx.workspace.scratch_path("concat_list", ".txt")
    with open(list_path, "w", encoding="utf-8") as f:
        f.write(concat_list_contents(input_paths))
    try:
        command = concat_command(list_path, output_path, ffmpeg=ctx.settings.ffmpeg_path)
        return await ctx.execute(command)
    finally:
        ctx.workspace.remove_quietly(list_path)


class ConcatenateVideos(BaseTool):
    def spec(self) -> ToolSpec:
        return ToolSpec(
            name="concatenate_videos",
            description="Concatenate multiple video files into one",
            args_model=ConcatenateArgs,
        )

    async def run(self, args: ConcatenateArgs, ctx: ToolContext) -> ToolResult:
        input_paths = [ctx.workspace.require_file(p) for p in args.input_files]
        output_path = ctx.workspace.resolve(args.output_file)
        result = await concatenate(ctx, input_paths, output_path)
        return ToolResult(
            f"Successfully concatenated {len(input_paths)} videos\n"
            f"Output: {output_path}\n\n"
            f"FFmpeg output: {result.stderr}"
        )
