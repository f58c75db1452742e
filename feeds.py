# feeds.py
"""
Feed providers: fetch raw articles from an upstream news API and normalize
each provider's JSON shape into an ArticleRecord.

fetch() failures are fatal for an ingestion run and raise FeedError.
normalize() never raises for bad input; it returns None so the caller can
skip the record and move on.
"""
import logging
from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

FEED_TIMEOUT = 10
PLACEHOLDER_DESCRIPTION = "No description available."
GUARDIAN_SOURCE_NAME = "The Guardian"


class FeedError(Exception):
    """The feed could not be fetched or parsed; the whole run is aborted."""


@dataclass
class ArticleRecord:
    title: str
    content: str
    category: str
    source: str
    url: str


def _string(value):
    return value.strip() if isinstance(value, str) else ""


def clean_text(value):
    """Return `value` as plain stripped text, or "" if it is not a usable string."""
    value = _string(value)
    if not value:
        return ""
    if "<" in value or "&" in value:
        value = BeautifulSoup(value, "html.parser").get_text(" ", strip=True)
    return value.strip()


def _mapping(value):
    return value if isinstance(value, dict) else {}


class FeedProvider:
    name = "feed"

    def __init__(self, api_key, category, timeout=FEED_TIMEOUT):
        self.api_key = api_key
        self.category = category
        self.timeout = timeout

    def request_url(self):
        raise NotImplementedError

    def request_params(self):
        raise NotImplementedError

    def extract_articles(self, payload):
        """Pull the raw article list out of the decoded top-level document."""
        raise NotImplementedError

    def normalize(self, raw, category):
        raise NotImplementedError

    def fetch(self):
        if not self.api_key:
            raise FeedError("%s API key is not set" % self.name)

        try:
            resp = requests.get(self.request_url(), params=self.request_params(), timeout=self.timeout)
        except requests.RequestException as e:
            raise FeedError("error fetching news from %s: %s" % (self.name, e)) from e

        if resp.status_code != 200:
            raise FeedError("%s returned status code %d" % (self.name, resp.status_code))

        try:
            payload = resp.json()
        except ValueError as e:
            raise FeedError("malformed JSON from %s: %s" % (self.name, e)) from e

        articles = self.extract_articles(payload)
        if not isinstance(articles, list):
            raise FeedError(
                "%s articles field is not a list, actual type: %s" % (self.name, type(articles).__name__)
            )
        logger.info("Fetched %d raw articles from %s", len(articles), self.name)
        return articles


class NewsAPIProvider(FeedProvider):
    """newsapi.org top headlines: {title, description, source: {name}, url}."""

    name = "newsapi"
    base_url = "https://newsapi.org/v2/top-headlines"

    def __init__(self, api_key, category, country="us", timeout=FEED_TIMEOUT):
        super().__init__(api_key, category, timeout=timeout)
        self.country = country

    def request_url(self):
        return self.base_url

    def request_params(self):
        return {"country": self.country, "category": self.category, "apiKey": self.api_key}

    def extract_articles(self, payload):
        if not isinstance(payload, dict):
            return None
        return payload.get("articles")

    def normalize(self, raw, category):
        if not isinstance(raw, dict):
            logger.warning("Skipping %s article: not an object", self.name)
            return None

        title = clean_text(raw.get("title"))
        url = _string(raw.get("url"))
        source_name = clean_text(_mapping(raw.get("source")).get("name"))
        if not title or not url or not source_name:
            logger.warning("Skipping %s article: title, url or source name missing (url=%r)", self.name, url)
            return None

        description = clean_text(raw.get("description")) or PLACEHOLDER_DESCRIPTION
        return ArticleRecord(title=title, content=description, category=category, source=source_name, url=url)


class GuardianProvider(FeedProvider):
    """Guardian content API: {webUrl, fields: {headline, bodyText}}."""

    name = "guardian"
    base_url = "https://content.guardianapis.com/search"

    def __init__(self, api_key, category, page_size=20, timeout=FEED_TIMEOUT):
        super().__init__(api_key, category, timeout=timeout)
        self.page_size = page_size

    def request_url(self):
        return self.base_url

    def request_params(self):
        return {
            "section": self.category,
            "show-fields": "headline,bodyText",
            "page-size": self.page_size,
            "api-key": self.api_key,
        }

    def extract_articles(self, payload):
        if not isinstance(payload, dict):
            return None
        return _mapping(payload.get("response")).get("results")

    def normalize(self, raw, category):
        if not isinstance(raw, dict):
            logger.warning("Skipping %s article: not an object", self.name)
            return None

        fields = _mapping(raw.get("fields"))
        headline = clean_text(fields.get("headline"))
        url = _string(raw.get("webUrl"))
        body = clean_text(fields.get("bodyText"))
        # body text is mandatory here, no placeholder
        if not headline or not url or not body:
            logger.warning("Skipping %s article: headline, webUrl or bodyText missing (url=%r)", self.name, url)
            return None

        return ArticleRecord(title=headline, content=body, category=category, source=GUARDIAN_SOURCE_NAME, url=url)


def build_feed_provider(settings):
    if settings.feed_provider == "newsapi":
        return NewsAPIProvider(settings.newsapi_key, settings.news_category, country=settings.news_country)
    if settings.feed_provider == "guardian":
        return GuardianProvider(settings.guardian_api_key, settings.news_category)
    raise ValueError("unknown feed provider: %r" % settings.feed_provider)
