"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Inventory
    inventory_file: str = "devices.yaml"

    # SNMP
    snmp_port: int = 161
    snmp_timeout: float = 3.0
    snmp_retries: int = 3

    # Scanner
    poll_concurrency: int = 10

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


settings = Settings()
