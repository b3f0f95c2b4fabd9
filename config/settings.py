"""
Configuration management for the scheduling data API.
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "EduScheduler Data API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # Storage
    data_dir: Path = Path("data")      # root of every JSON file, tenant dirs under admins/
    public_dir: Path = Path("public")  # static assets (logo.png)

    # Schedule advisor
    advisor_backend: str = "gemini"    # "gemini" or "rules"
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    advisor_temperature: float = 0.2

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
