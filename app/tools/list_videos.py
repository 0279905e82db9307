"""Lists video files in the configured base directory."""

from pydantic import BaseModel

from app.tools.base import BaseTool, ToolContext, ToolResult, ToolSpec


class ListVideosArgs(BaseModel):
    pass


class ListVideoFiles(BaseTool):
    def spec(self) -> ToolSpec:
        return ToolSpec(
            name="list_video_files",
            description="List video files in the working directory with their sizes",
            args_model=ListVideosArgs,
        )

    async def run(self, args: ListVideosArgs, ctx: ToolContext) -> ToolResult:
        videos = ctx.workspace.list_videos()
        if not videos:
            return ToolResult(f"No video files found in {ctx.workspace.base_dir}")
        lines = [f"Video files in {ctx.workspace.base_dir}:"]
        lines += [f"- {v.name} ({v.size_display})" for v in videos]
        return ToolResult("\n".join(lines))
