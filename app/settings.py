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

    # Blog data source (http(s) URL or local path)
    BLOG_DATA_URL: str = "data/blog-posts.json"
    FETCH_TIMEOUT_SECONDS: float = 10.0

    # Blog
    BLOG_TITLE: str = "Riddhi's Blog"
    BLOG_PATH: str = "/blog"
    POSTS_PATH: str = "/blogs"
    DEFAULT_COVER_IMAGE: str = "images/default-cover.svg"

    # Listing
    PAGE_SIZE: int = 6
    RECENT_POSTS_COUNT: int = 3
    TAG_CLOUD_SIZE: int = 15
    CARD_TAG_LIMIT: int = 3

    # Post page
    RELATED_POSTS_COUNT: int = 3
    RELATED_EXCERPT_LENGTH: int = 100

    # Reading time heuristic: characters / CHARS_PER_WORD ~ words
    WORDS_PER_MINUTE: int = 200
    CHARS_PER_WORD: int = 5

    # Portfolio
    AUTHOR_NAME: str = "Riddhi"
    PORTFOLIO_DATA_URL: str = "data/portfolio.json"

    # Static assets (css/, js/, images/, videos/, files/) served from here
    STATIC_ROOT: str = "static"

    # Logging
    LOG_LEVEL: str = "INFO"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
