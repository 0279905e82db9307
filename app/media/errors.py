"""
Media error types.

All errors inherit from MediaError so tool handlers can report them
uniformly as error results.
"""


class MediaError(Exception):
    """Base exception for media-processing failures."""
    pass


class InvalidMediaPathError(MediaError):
    """Raised when a tool file argument cannot be used."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path '{path}': {reason}")


class MediaCommandError(MediaError):
    """Raised when a synchronous ffmpeg/ffprobe invocation fails."""

    def __init__(self, command: str, returncode: int, stderr: str):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed with exit code {returncode}: {stderr.strip()}")


class ProbeParseError(MediaError):
    """Raised when ffprobe output cannot be interpreted."""
    pass
