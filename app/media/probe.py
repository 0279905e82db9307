"""Summarise ffprobe JSON output into a compact, human-readable description."""

import json
from fractions import Fraction
from typing import Any, Dict, Optional, Union

from app.media.errors import ProbeParseError


def parse_probe_output(stdout: str) -> Dict[str, Any]:
    try:
        data = json.loads(stdout)
    except json.JSONDecodeError as exc:
        raise ProbeParseError(f"ffprobe returned invalid JSON: {exc}") from exc
    if not isinstance(data, dict) or "format" not in data:
        raise ProbeParseError("ffprobe output has no format section")
    data.setdefault("streams", [])
    return data


def parse_frame_rate(value: Optional[str]) -> Optional[float]:
    """'30000/1001' -> 29.97. Returns None for missing or 0/0 rates."""
    if not value:
        return None
    try:
        rate = Fraction(value)
    except (ValueError, ZeroDivisionError):
        return None
    return round(float(rate), 3)


def format_duration(seconds: float) -> str:
    """H:MM:SS (Ns), e.g. '1:02:05 (3725.4s)'."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return f"{hours}:{minutes:02d}:{secs:02d} ({seconds:g}s)"


def format_bitrate(value: Optional[Union[str, int]]) -> str:
    if not value:
        return "N/A"
    try:
        return f"{round(int(value) / 1000)} kbps"
    except (TypeError, ValueError):
        return "N/A"


def _first_stream(info: Dict[str, Any], codec_type: str) -> Optional[Dict[str, Any]]:
    for stream in info.get("streams", []):
        if stream.get("codec_type") == codec_type:
            return stream
    return None


def summarize(info: Dict[str, Any], input_file: str) -> Dict[str, Any]:
    """Build the summary dict returned by the video info tool."""
    fmt = info.get("format", {})
    try:
        duration = float(fmt.get("duration", 0) or 0)
        size_mb = round(int(fmt.get("size", 0) or 0) / 1024 / 1024)
    except (TypeError, ValueError) as exc:
        raise ProbeParseError(f"Unreadable format section: {exc}") from exc

    video = _first_stream(info, "video")
    audio = _first_stream(info, "audio")

    return {
        "file": input_file,
        "duration": format_duration(duration),
        "size": f"{size_mb} MB",
        "video": {
            "codec": video.get("codec_name"),
            "resolution": f"{video.get('width')}x{video.get('height')}",
            "fps": parse_frame_rate(video.get("r_frame_rate")),
            "bitrate": format_bitrate(video.get("bit_rate")),
        } if video else "No video stream",
        "audio": {
            "codec": audio.get("codec_name"),
            "channels": audio.get("channels"),
            "sample_rate": f"{audio.get('sample_rate')} Hz",
            "bitrate": format_bitrate(audio.get("bit_rate")),
        } if audio else "No audio stream",
    }
