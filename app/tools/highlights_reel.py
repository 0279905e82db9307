"""Highlights reel tool: extract several segments, then join them."""

from typing import List

from pydantic import BaseModel, Field

from app.tools.base import BaseTool, ToolContext, ToolResult, ToolSpec
from app.tools.concatenate import concatenate
from app.tools.extract_segment import extract_segment


class Segment(BaseModel):
    start_time: str = Field(..., min_length=1, description="Start timestamp")
    end_time: str = Field(..., min_length=1, description="End timestamp")


class HighlightsReelArgs(BaseModel):
    input_file: str = Field(..., min_length=1, description="Path to input video file")
    segments: List[Segment] = Field(..., min_length=1, description="Array of segments to extract")
    output_file: str = Field(..., min_length=1, description="Path for output highlights video")


class CreateHighlightsReel(BaseTool):
    def spec(self) -> ToolSpec:
        return ToolSpec(
            name="create_highlights_reel",
            description="Create a highlights reel from multiple timestamp segments",
            args_model=HighlightsReelArgs,
        )

    async def run(self, args: HighlightsReelArgs, ctx: ToolContext) -> ToolResult:
        input_path = ctx.workspace.require_file(args.input_file)
        output_path = ctx.workspace.resolve(args.output_file)

        temp_files: List[str] = []
        try:
            for i, segment in enumerate(args.segments):
                temp_file = ctx.workspace.scratch_path(f"segment_{i}", ".mp4")
                temp_files.append(temp_file)
                await extract_segment(
                    ctx, input_path, temp_file, segment.start_time, segment.end_time
                )
            await concatenate(ctx, temp_files, output_path)
        finally:
            for temp_file in temp_files:
                ctx.workspace.remove_quietly(temp_file)

        return ToolResult(
            f"Successfully created highlights reel with {len(args.segments)} segments\n"
            f"Output: {output_path}"
        )
