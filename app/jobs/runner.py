"""External process runners.

The job manager never talks to the OS directly; it goes through a ProcessRunner
so tests can substitute a fake that completes on demand.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

from app.jobs.models import ProcessResult

logger = logging.getLogger(__name__)


class ProcessLaunchError(Exception):
    """Raised when an external command could not be started."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Failed to launch command: {reason}")


class ProcessRunner(ABC):
    """Starts external commands and waits for their exit."""

    @abstractmethod
    async def spawn(self, command: str) -> Any:
        """Start `command` without waiting for it. Returns a process handle."""
        ...

    @abstractmethod
    async def wait(self, handle: Any) -> ProcessResult:
        """Wait for the process behind `handle` to exit."""
        ...

    async def run(self, command: str) -> ProcessResult:
        """Spawn and wait. Launch failures come back as a failed result."""
        try:
            handle = await self.spawn(command)
        except ProcessLaunchError as exc:
            return ProcessResult(returncode=-1, stderr=str(exc))
        return await self.wait(handle)


class ShellProcessRunner(ProcessRunner):
    """Runs commands through the system shell with asyncio subprocesses."""

    async def spawn(self, command: str) -> asyncio.subprocess.Process:
        logger.debug("Spawning: %s", command)
        try:
            return await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as exc:
            raise ProcessLaunchError(command, str(exc)) from exc

    async def wait(self, handle: asyncio.subprocess.Process) -> ProcessResult:
        stdout, stderr = await handle.communicate()
        return ProcessResult(
            returncode=handle.returncode if handle.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace") if stdout else "",
            stderr=stderr.decode("utf-8", errors="replace") if stderr else "",
        )
