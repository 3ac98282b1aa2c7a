from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    gs_binaries: list[str] = ["gs"]
    gs_timeout_seconds: int | None = None

    temp_dir: Path | None = None
    max_pages: int = 10000

    jpeg_quality: int = 75
    image_resolution: int = 300
