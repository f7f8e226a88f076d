from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Prismic
    PRISMIC_API_URL: str = "https://spacetraveling.cdn.prismic.io/api/v2"
    PRISMIC_ACCESS_TOKEN: str = ""
    CMS_TIMEOUT_SECONDS: float = 10.0

    # Listing
    POSTS_PAGE_SIZE: int = 20

    # Post pages
    REVALIDATE_SECONDS: int = 60 * 30  # 30 minutes
    READING_WORDS_PER_MINUTE: int = 200
    PRERENDER_ON_STARTUP: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings
