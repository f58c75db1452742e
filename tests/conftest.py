import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from config import Settings
from database import build_session_factory
from feeds import NewsAPIProvider
from models import Base
from tests.helpers import FakeSummarizer


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        newsapi_key="test-news-key",
        huggingface_api_key="test-hf-key",
        jwt_secret="test-secret",
        rate_limit_per_minute=0,
    )


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def provider():
    return NewsAPIProvider("test-news-key", "business")


@pytest.fixture
def summarizer():
    return FakeSummarizer()
