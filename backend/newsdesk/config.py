import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel

DATA_HOME = Path(__file__).parent / "data"

DEFAULT_MODEL = "gemini-2.5-flash"
# Serverless hosts cap request bodies at 4.5MB.
DEFAULT_MAX_UPLOAD_BYTES = int(4.5 * 1024 * 1024)
DEFAULT_MAX_VIDEO_DURATION_SECONDS = 600


class ConfigError(ValueError):
    """Raised when an environment setting is present but unusable."""


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


class Settings(BaseModel):
    """Runtime configuration, read from the environment."""
    api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODEL
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    max_video_duration_seconds: int = DEFAULT_MAX_VIDEO_DURATION_SECONDS
    news_data_path: Path = DATA_HOME / "news.json"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_key=os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            max_upload_bytes=_int_env("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
            max_video_duration_seconds=_int_env("MAX_VIDEO_DURATION_SECONDS", DEFAULT_MAX_VIDEO_DURATION_SECONDS),
            news_data_path=Path(os.getenv("NEWS_DATA_PATH", DATA_HOME / "news.json")),
        )
