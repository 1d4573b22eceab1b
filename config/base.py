from __future__ import annotations

from pydantic_settings import BaseSettings


class CommonSettings(BaseSettings):
    """Settings shared by every mode. Per-mode classes pick the env file and defaults."""

    DATABASE_URL: str | None = None
    APP_ENV: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Create missing tables at startup instead of relying on Alembic
    AUTO_CREATE_TABLES: bool = False

    # Raw value; parsed by main.get_cors_origins (JSON array or comma-separated)
    CORS_ORIGINS: str = ""

    # NHTSA vPIC; the console decodes VINs directly against it
    VIN_DECODE_BASE_URL: str = "https://vpic.nhtsa.dot.gov/api/vehicles"
    VIN_DECODE_TIMEOUT: float = 10.0

    # Where the console reaches the asset API
    API_BASE_URL: str = "http://localhost:8000"

    @property
    def database_url(self) -> str:
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL is not configured")
        return self.DATABASE_URL
