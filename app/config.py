"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Media workspace
    video_base_dir: str = "."
    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"

    # Background job policy
    large_file_threshold_gb: float = 1.0
    job_retention_minutes: int = 60
    minutes_per_gb: float = 3.0
    recent_jobs_display: int = 3

    # Server
    port: int = 8002
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
