"""Video workspace: path resolution, file sizing, listing and scratch files."""

import os
import uuid
from dataclasses import dataclass
from typing import List, Optional

from app.jobs.policy import BYTES_PER_GB, format_size
from app.media.errors import InvalidMediaPathError

VIDEO_EXTENSIONS = (".mp4", ".mov", ".avi", ".mkv", ".webm", ".m4v", ".flv", ".wmv")


@dataclass
class VideoFile:
    name: str
    path: str
    size_bytes: int

    @property
    def size_display(self) -> str:
        return format_size(self.size_bytes)


class VideoWorkspace:
    """Resolves tool file arguments against a configured base directory."""

    def __init__(self, base_dir: Optional[str] = None):
        self._base_dir = os.path.abspath(base_dir or os.getcwd())

    @property
    def base_dir(self) -> str:
        return self._base_dir

    def resolve(self, path: str) -> str:
        """Absolute path for `path`; relative paths are taken from the base dir."""
        if not path or not path.strip():
            raise InvalidMediaPathError(path, "path is empty")
        if os.path.isabs(path):
            return os.path.normpath(path)
        return os.path.normpath(os.path.join(self._base_dir, path))

    def require_file(self, path: str) -> str:
        resolved = self.resolve(path)
        if not os.path.isfile(resolved):
            raise InvalidMediaPathError(path, "file does not exist")
        return resolved

    def size_bytes(self, path: str) -> int:
        return os.path.getsize(self.require_file(path))

    def size_gb(self, path: str) -> float:
        return self.size_bytes(path) / BYTES_PER_GB

    def list_videos(self) -> List[VideoFile]:
        """Video files directly inside the base dir, sorted by name."""
        if not os.path.isdir(self._base_dir):
            return []
        videos = []
        for entry in sorted(os.listdir(self._base_dir)):
            full = os.path.join(self._base_dir, entry)
            if not os.path.isfile(full):
                continue
            if not entry.lower().endswith(VIDEO_EXTENSIONS):
                continue
            videos.append(VideoFile(name=entry, path=full, size_bytes=os.path.getsize(full)))
        return videos

    def scratch_path(self, prefix: str, suffix: str) -> str:
        """Unique scratch file path inside the base dir."""
        return os.path.join(self._base_dir, f"{prefix}_{uuid.uuid4().hex[:8]}{suffix}")

    def remove_quietly(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
