# config.py
import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Process configuration, read once at startup and handed to each component."""

    database_url: str = "sqlite:///newsapp.db"
    db_pool_size: int = 20
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    feed_provider: str = "newsapi"
    newsapi_key: str = ""
    guardian_api_key: str = ""
    news_category: str = "business"
    news_country: str = "us"

    summarizer: str = "huggingface"
    huggingface_api_key: str = ""
    huggingface_model: str = "facebook/bart-large-cnn"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    resummarize_on_read: bool = True
    fetch_on_startup: bool = True

    jwt_secret: str = "change-me"
    jwt_expiry_hours: int = 24
    rate_limit_per_minute: int = 20

    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls, dotenv=True):
        if dotenv:
            load_dotenv()
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", cls.db_pool_size)),
            db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", cls.db_max_overflow)),
            db_pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", cls.db_pool_timeout)),
            db_pool_recycle=int(os.getenv("DB_POOL_RECYCLE", cls.db_pool_recycle)),
            feed_provider=os.getenv("FEED_PROVIDER", cls.feed_provider).strip().lower(),
            newsapi_key=os.getenv("NEWSAPI_KEY", ""),
            guardian_api_key=os.getenv("GUARDIAN_API_KEY", ""),
            news_category=os.getenv("NEWS_CATEGORY", cls.news_category),
            news_country=os.getenv("NEWS_COUNTRY", cls.news_country),
            summarizer=os.getenv("SUMMARIZER", cls.summarizer).strip().lower(),
            huggingface_api_key=os.getenv("HUGGINGFACE_API_KEY", ""),
            huggingface_model=os.getenv("HUGGINGFACE_MODEL", cls.huggingface_model),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", cls.openai_model),
            resummarize_on_read=_env_bool("RESUMMARIZE_ON_READ", cls.resummarize_on_read),
            fetch_on_startup=_env_bool("FETCH_ON_STARTUP", cls.fetch_on_startup),
            jwt_secret=os.getenv("JWT_SECRET", cls.jwt_secret),
            jwt_expiry_hours=int(os.getenv("JWT_EXPIRY_HOURS", cls.jwt_expiry_hours)),
            rate_limit_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", cls.rate_limit_per_minute)),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
        )
