from unittest.mock import Mock

from summarizer import EmptySummary


class FakeSummarizer:
    """Summarizer double: prefixes text with "summary: " and fails for chosen inputs."""

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []

    def summarize(self, text):
        self.calls.append(text)
        if text in self.fail_on:
            raise EmptySummary("no summary returned")
        return "summary: " + text


def newsapi_article(n, **overrides):
    article = {
        "title": "Headline %d" % n,
        "description": "Body text %d" % n,
        "source": {"id": None, "name": "Reuters"},
        "url": "https://example.com/%d" % n,
    }
    article.update(overrides)
    return article


def feed_response(payload, status_code=200):
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    return resp
