"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "payment-core"
    log_level: str = "INFO"

    # Payment providers
    stripe_api_base: str = "https://api.stripe.com"
    paystack_api_base: str = "https://api.paystack.co"

    # HTTP Client
    http_timeout_seconds: float = 10.0


settings = Settings()
