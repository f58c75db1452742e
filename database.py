# database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker


def build_engine(settings):
    url = settings.database_url
    if url.startswith("sqlite"):
        # sqlite has no server-side pool to tune
        return create_engine(url, connect_args={"check_same_thread": False}, future=True)

    # tuned pooling for production - adjust pool_size/max_overflow for your workload & instance size
    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        future=True,
    )


def build_session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
