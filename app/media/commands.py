"""ffmpeg / ffprobe command-line construction.

Every function returns a ready-to-run shell command string. Paths are quoted
with shlex so they survive spaces and shell metacharacters.
"""

from shlex import quote
from typing import Iterable


def _num(value: float) -> str:
    return f"{value:g}"


def extract_segment_command(
    input_path: str,
    output_path: str,
    start_time: str,
    end_time: str,
    ffmpeg: str = "ffmpeg",
) -> str:
    return (
        f"{ffmpeg} -y -i {quote(input_path)} -ss {quote(start_time)} -to {quote(end_time)} "
        f"-c copy {quote(output_path)}"
    )


def concat_list_contents(paths: Iterable[str]) -> str:
    """Body of an ffmpeg concat-demuxer list file."""
    lines = []
    for path in paths:
        escaped = path.replace("'", "'\\''")
        lines.append(f"file '{escaped}'")
    return "\n".join(lines) + "\n"


def concat_command(list_path: str, output_path: str, ffmpeg: str = "ffmpeg") -> str:
    return (
        f"{ffmpeg} -y -f concat -safe 0 -i {quote(list_path)} -c copy {quote(output_path)}"
    )


def change_speed_command(
    input_path: str, output_path: str, speed: float, ffmpeg: str = "ffmpeg"
) -> str:
    """Speed-ups drop the audio track; slow-downs keep it, retimed with atempo."""
    video_filter = quote(f"setpts=PTS/{_num(speed)}")
    if speed > 1:
        return (
            f"{ffmpeg} -y -i {quote(input_path)} -filter:v {video_filter} -an "
            f"{quote(output_path)}"
        )
    audio_filter = quote(f"atempo={_num(speed)}")
    return (
        f"{ffmpeg} -y -i {quote(input_path)} -filter:v {video_filter} "
        f"-filter:a {audio_filter} {quote(output_path)}"
    )


def probe_command(input_path: str, ffprobe: str = "ffprobe") -> str:
    return (
        f"{ffprobe} -v quiet -print_format json -show_format -show_streams "
        f"{quote(input_path)}"
    )
