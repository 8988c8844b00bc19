"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./data/ledger.db"

    # Service
    service_name: str = "business-ledger"
    log_level: str = "INFO"
    port: int = 5050

    # Assistant
    ai_mode: str = "auto"  # auto | simulated | openai
    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-3.5-turbo"
    simulated_reply_delay_seconds: float = 1.0

    # HTTP Client
    http_timeout_seconds: float = 15.0


settings = Settings()
