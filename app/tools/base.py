"""Base tool interface and data types for the tool registry."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Type

from pydantic import BaseModel

from app.config import Settings
from app.jobs.manager import BackgroundJobManager
from app.jobs.models import ExecutionMode, ProcessResult
from app.jobs.policy import classify, estimate_duration, format_size_gb
from app.jobs.runner import ProcessRunner
from app.media.errors import MediaCommandError
from app.storage.workspace import VideoWorkspace


class ToolError(Exception):
    """Base exception for tool invocation failures."""
    pass


class UnknownToolError(ToolError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


@dataclass
class ToolSpec:
    """Metadata describing a registered tool."""
    name: str
    description: str
    args_model: Type[BaseModel]

    def input_schema(self) -> Dict[str, Any]:
        return self.args_model.model_json_schema()


@dataclass
class ToolResult:
    text: str
    is_error: bool = False

    def to_response(self) -> Dict[str, Any]:
        return {
            "content": [{"type": "text", "text": self.text}],
            "is_error": self.is_error,
        }


@dataclass
class ToolContext:
    """Collaborators a tool needs, wired once at startup."""
    settings: Settings
    workspace: VideoWorkspace
    runner: ProcessRunner
    jobs: BackgroundJobManager

    async def execute(self, command: str) -> ProcessResult:
        """Run a command to completion; non-zero exit raises MediaCommandError."""
        result = await self.runner.run(command)
        if not result.ok:
            raise MediaCommandError(command, result.returncode, result.error_text)
        return result

    def classify(self, size_gb: float) -> ExecutionMode:
        return classify(size_gb, self.settings.large_file_threshold_gb)

    async def submit_background(
        self,
        input_ref: str,
        output_ref: str,
        command: str,
        size_gb: float,
        speed_factor: float = 1.0,
    ) -> ToolResult:
        job_id = await self.jobs.submit(input_ref, output_ref, command, size_gb)
        estimate = estimate_duration(size_gb, speed_factor, self.settings.minutes_per_gb)
        return ToolResult(
            f"Large file detected ({format_size_gb(size_gb)}). Processing in background.\n"
            f"Job ID: {job_id}\n"
            f"Estimated time: {estimate}\n"
            f"Output: {output_ref}\n\n"
            f"Use check_job_status to monitor progress."
        )


class BaseTool(ABC):
    """Abstract base class for all tools in the registry.

    To register a new tool:
    1. Create a new .py file in app/tools/
    2. Subclass BaseTool
    3. Implement spec() and run()
    4. The registry auto-discovers it at startup
    """

    @abstractmethod
    def spec(self) -> ToolSpec:
        """Return tool metadata."""
        ...

    @abstractmethod
    async def run(self, args: Any, ctx: ToolContext) -> ToolResult:
        """Execute with validated arguments (an instance of spec().args_model)."""
        ...

    async def invoke(self, raw_args: Dict[str, Any], ctx: ToolContext) -> ToolResult:
        args = self.spec().args_model.model_validate(raw_args or {})
        return await self.run(args, ctx)
