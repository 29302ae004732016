"""Application settings and configuration."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials (all optional; missing ones degrade to error payloads)
    huggingface_api_key: str = Field(default="", description="HuggingFace inference token")
    openrouter_api_key: str = Field(default="", description="OpenRouter API key")
    news_api_key: str = Field(default="", description="NewsAPI key")

    # Upstream endpoints
    hf_base_url: str = "https://api-inference.huggingface.co"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    reddit_base_url: str = "https://www.reddit.com"
    news_base_url: str = "https://newsapi.org/v2"

    # Models
    default_model: str = "mistralai/Mistral-7B-Instruct-v0.2"
    openrouter_model: str = "mistralai/mistral-7b-instruct:free"

    # Transport
    http_timeout: float = Field(default=30.0, gt=0)
    user_agent: str = "promptgate/0.1 (+https://github.com/promptgate)"

    # Logging
    log_level: str = "INFO"

    # Service configuration
    service_host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    debug: bool = False

    app_name: str = "promptgate"
    environment: str = "development"

    @property
    def huggingface_configured(self) -> bool:
        return bool(self.huggingface_api_key)

    @property
    def openrouter_configured(self) -> bool:
        return bool(self.openrouter_api_key)

    @property
    def news_configured(self) -> bool:
        return bool(self.news_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get settings singleton."""
    return Settings()
