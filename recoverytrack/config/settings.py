"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # App info
    app_name: str = "RecoveryTrack"
    app_version: str = "1.0.0"
    debug: bool = False

    # Security
    secret_key: str = "change-this-secret-key-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24  # 1 day

    # Storage
    storage_type: str = "local"
    local_storage_path: str = "./data"
    max_attachment_bytes: int = 10 * 1024 * 1024  # 10 MB

    # Generative text provider
    llm_provider: str = "gemini"
    llm_api_key: Optional[str] = None
    llm_model: Optional[str] = None  # uses provider default if not set
    llm_base_url: Optional[str] = None  # uses provider default if not set
    llm_timeout_seconds: float = 30.0

    # Legacy key name (still accepted)
    gemini_api_key: Optional[str] = None

    # Recovery plan sampling
    plan_temperature: float = 0.7
    plan_top_k: int = 40
    plan_top_p: float = 0.95
    plan_max_output_tokens: int = 2048

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/recoverytrack.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True  # Log all API requests/responses


settings = Settings()
