# pipeline.py
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

import crud
from summarizer import SummarizationError

logger = logging.getLogger(__name__)


@dataclass
class IngestionStats:
    fetched: int = 0
    skipped: int = 0
    failed: int = 0
    stored: int = 0


def run_ingestion(session, provider, summarizer):
    """Fetch one batch from `provider`, summarize each article and store it.

    A FeedError from the provider aborts the run before anything is stored.
    Every other failure only costs the article it happened on.
    """
    raw_articles = provider.fetch()
    stats = IngestionStats(fetched=len(raw_articles))
    category = provider.category

    for raw in raw_articles:
        record = provider.normalize(raw, category)
        if record is None:
            stats.skipped += 1
            continue

        try:
            existing = crud.get_article_by_url(session, record.url)
        except SQLAlchemyError:
            logger.exception("Error looking up news article: %s", record.url)
            session.rollback()
            stats.failed += 1
            continue
        if existing is not None:
            logger.info("Article already stored, skipping: %s", record.url)
            stats.skipped += 1
            continue

        try:
            summary = summarizer.summarize(record.content)
        except SummarizationError as e:
            logger.warning("Error summarizing article '%s': %s", record.title, e)
            stats.failed += 1
            continue
        record.content = summary

        try:
            crud.create_article(
                session,
                title=record.title,
                content=record.content,
                category=record.category,
                source=record.source,
                url=record.url,
            )
        except SQLAlchemyError:
            logger.exception("Error storing news article: %s", record.url)
            session.rollback()
            stats.failed += 1
            continue
        stats.stored += 1
        logger.info("Stored article: %s", record.url)

    logger.info(
        "Ingestion finished: fetched=%d stored=%d skipped=%d failed=%d",
        stats.fetched, stats.stored, stats.skipped, stats.failed,
    )
    return stats


def article_to_dict(article):
    return {
        "id": article.id,
        "title": article.title,
        "content": article.content,
        "category": article.category,
        "source": article.source,
        "url": article.url,
        "created_at": article.created_at.isoformat() if article.created_at else None,
    }


def get_personalized_news(session, user_id, categories, summarizer, resummarize=True):
    """Stored articles in `categories` as dicts, newest first.

    With `resummarize`, each article's content is summarized again on the way
    out; when that fails the stored content is returned unchanged. Stored rows
    are never modified.
    """
    articles = crud.get_articles_by_categories(session, list(categories))
    logger.info("Personalized news for user %s: %d articles in %s", user_id, len(articles), list(categories))

    result = []
    for article in articles:
        item = article_to_dict(article)
        if resummarize:
            try:
                item["content"] = summarizer.summarize(article.content)
            except SummarizationError as e:
                logger.warning("Error summarizing article '%s': %s", article.title, e)
        result.append(item)
    return result
