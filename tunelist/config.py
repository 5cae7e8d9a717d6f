# ============================================================================
# FILE: tunelist/config.py
# ============================================================================
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "Tunelist"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # JSON file storage
    DATA_DIR: Path = Path("./data")

    # Uploads
    MAX_UPLOAD_SIZE: int = 20 * 1024 * 1024  # 20MB
    UPLOAD_CHUNK_SIZE: int = 1024 * 1024

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Redis cache (catalog responses only)
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_EXPIRE_SECONDS: int = 3600

    # YouTube Data API v3
    YOUTUBE_API_KEY: str = ""
    YOUTUBE_API_SERVICE_NAME: str = "youtube"
    YOUTUBE_API_VERSION: str = "v3"
    YOUTUBE_EMBED_URL: str = "https://www.youtube.com/embed/{video_id}?autoplay=1"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def users_file(self) -> Path:
        return self.DATA_DIR / "users.json"

    @property
    def playlists_dir(self) -> Path:
        return self.DATA_DIR / "playlists"

    @property
    def upload_dir(self) -> Path:
        return self.DATA_DIR / "uploads"


settings = Settings()
