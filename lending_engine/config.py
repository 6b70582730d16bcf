"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "lending-engine"
    log_level: str = "INFO"

    # Amortization
    max_term_months: int = 600  # Upper bound accepted for schedule requests
    csv_filename_prefix: str = "amortization"


settings = Settings()
