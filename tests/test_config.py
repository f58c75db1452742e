"""Tests for environment-driven settings and startup wiring."""

from unittest.mock import Mock, patch

from config import Settings
from feeds import FeedError, GuardianProvider, NewsAPIProvider
from main import bootstrap, ingest_on_startup
from models import Article
from summarizer import OpenAISummarizer
from tests.helpers import FakeSummarizer


def test_defaults(monkeypatch) -> None:
    for key in ("FEED_PROVIDER", "NEWS_CATEGORY", "SUMMARIZER", "RESUMMARIZE_ON_READ", "RATE_LIMIT_PER_MINUTE"):
        monkeypatch.delenv(key, raising=False)

    settings = Settings.from_env(dotenv=False)

    assert settings.feed_provider == "newsapi"
    assert settings.news_category == "business"
    assert settings.summarizer == "huggingface"
    assert settings.resummarize_on_read is True
    assert settings.rate_limit_per_minute == 20


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("FEED_PROVIDER", "Guardian")
    monkeypatch.setenv("GUARDIAN_API_KEY", "g-key")
    monkeypatch.setenv("NEWS_CATEGORY", "technology")
    monkeypatch.setenv("SUMMARIZER", "openai")
    monkeypatch.setenv("OPENAI_API_KEY", "o-key")
    monkeypatch.setenv("RESUMMARIZE_ON_READ", "false")
    monkeypatch.setenv("PORT", "9000")

    settings = Settings.from_env(dotenv=False)

    assert settings.feed_provider == "guardian"
    assert settings.guardian_api_key == "g-key"
    assert settings.news_category == "technology"
    assert settings.resummarize_on_read is False
    assert settings.port == 9000


def test_bootstrap_builds_configured_components() -> None:
    settings = Settings(
        database_url="sqlite://",
        feed_provider="guardian",
        guardian_api_key="g",
        summarizer="openai",
        openai_api_key="o",
    )

    session_factory, provider, summarizer = bootstrap(settings)

    assert isinstance(provider, GuardianProvider)
    assert isinstance(summarizer, OpenAISummarizer)
    session = session_factory()
    try:
        assert session.query(Article).count() == 0
    finally:
        session.close()


def test_startup_ingestion_swallows_feed_error(session_factory) -> None:
    class BrokenProvider:
        category = "business"

        def fetch(self):
            raise FeedError("NEWSAPI_KEY is not set")

    with patch("main.logger") as mock_logger:
        ingest_on_startup(session_factory, BrokenProvider(), FakeSummarizer())

    mock_logger.error.assert_called_once()


def test_startup_ingestion_closes_session_after_feed_error() -> None:
    session = Mock()
    provider = NewsAPIProvider("", "business")

    ingest_on_startup(lambda: session, provider, FakeSummarizer())

    session.close.assert_called_once()
    session.add.assert_not_called()
