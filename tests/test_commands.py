import shlex

from app.media.commands import (
    change_speed_command,
    concat_command,
    concat_list_contents,
    extract_segment_command,
    probe_command,
)


def test_extract_command_quotes_paths():
    cmd = extract_segment_command("/v/my clip.mp4", "/v/out.mp4", "00:01:00", "00:02:30")
    args = shlex.split(cmd)
    assert args[:4] == ["ffmpeg", "-y", "-i", "/v/my clip.mp4"]
    assert args[args.index("-ss") + 1] == "00:01:00"
    assert args[args.index("-to") + 1] == "00:02:30"
    assert args[-3:] == ["-c", "copy", "/v/out.mp4"]


def test_speed_up_drops_audio():
    args = shlex.split(change_speed_command("in.mp4", "out.mp4", 4.0))
    assert args[args.index("-filter:v") + 1] == "setpts=PTS/4"
    assert "-an" in args
    assert "-filter:a" not in args


def test_slow_down_keeps_audio():
    args = shlex.split(change_speed_command("in.mp4", "out.mp4", 0.5))
    assert args[args.index("-filter:v") + 1] == "setpts=PTS/0.5"
    assert args[args.index("-filter:a") + 1] == "atempo=0.5"
    assert "-an" not in args


def test_concat_list_escapes_single_quotes():
    body = concat_list_contents(["/v/a.mp4", "/v/it's.mp4"])
    assert body == "file '/v/a.mp4'\nfile '/v/it'\\''s.mp4'\n"


def test_concat_and_probe_commands():
    assert shlex.split(concat_command("/tmp/list.txt", "/v/out.mp4")) == [
        "ffmpeg", "-y", "-f", "concat", "-safe", "0", "-i", "/tmp/list.txt", "-c", "copy", "/v/out.mp4",
    ]
    args = shlex.split(probe_command("/v/a b.mp4", ffprobe="/opt/ffprobe"))
    assert args[0] == "/opt/ffprobe"
    assert args[-1] == "/v/a b.mp4"
