from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    APP_NAME: str = "Moodcast"
    PORT: int = 8000
    APP_ENV: Literal["development", "production"] = "production"
    HOST_NAME: str = "http://localhost:8000"

    # AI
    DEFAULT_GEMINI_MODEL: str = "gemini-2.0-flash"
    GEMINI_API_KEY: str | None = None
    GEMINI_TIMEOUT_SECONDS: float = 30.0
    CHAT_MAX_OUTPUT_TOKENS: int = 1000

    # Podcast directory
    PODCHASER_API_KEY: str | None = None
    PODCHASER_API_URL: str = "https://api.podchaser.com/graphql"
    PODCHASER_TIMEOUT_SECONDS: float = 10.0
    SEARCH_PAGE_SIZE: int = 4
    SEARCH_MIN_RATING: int = 4
    SEARCH_MAX_RATING: int = 5

    # Conversation
    DEFAULT_SESSION_KEY: str = "default"
    SESSION_IDLE_TTL_SECONDS: int = 0  # 0 = never evict


settings = Settings()
