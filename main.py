# main.py
import logging

from app.api import create_app
from config import Settings
from database import build_engine, build_session_factory
from feeds import FeedError, build_feed_provider
from models import Base
from pipeline import run_ingestion
from summarizer import build_summarizer

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("newsapp")


def bootstrap(settings):
    engine = build_engine(settings)
    # Ensure tables exist
    Base.metadata.create_all(bind=engine)
    session_factory = build_session_factory(engine)
    provider = build_feed_provider(settings)
    summarizer = build_summarizer(settings)
    return session_factory, provider, summarizer


def ingest_on_startup(session_factory, provider, summarizer):
    session = session_factory()
    try:
        run_ingestion(session, provider, summarizer)
    except FeedError as e:
        logger.error("Startup ingestion aborted: %s", e)
    finally:
        session.close()


def main():
    settings = Settings.from_env()
    session_factory, provider, summarizer = bootstrap(settings)

    if settings.fetch_on_startup:
        ingest_on_startup(session_factory, provider, summarizer)

    app = create_app(settings, session_factory, provider, summarizer)
    logger.info("Server running at http://%s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=False)


if __name__ == "__main__":
    main()
