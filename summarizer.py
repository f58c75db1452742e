# summarizer.py
import logging

import openai
import requests
from openai import OpenAI

logger = logging.getLogger(__name__)

SUMMARY_TIMEOUT = 10
HUGGINGFACE_BASE_URL = "https://api-inference.huggingface.co/models/"
SUMMARY_PROMPT = "Summarize the following news article in two or three sentences."


class SummarizationError(Exception):
    """Base class for every way a summarization call can fail."""


class ConfigurationMissing(SummarizationError):
    pass


class EmptyInput(SummarizationError):
    pass


class TransportFailure(SummarizationError):
    pass


class UpstreamError(SummarizationError):
    def __init__(self, status_code, detail=""):
        super().__init__("unexpected status code %s: %s" % (status_code, detail))
        self.status_code = status_code


class MalformedResponse(SummarizationError):
    pass


class EmptySummary(SummarizationError):
    pass


class Summarizer:
    name = "summarizer"

    def __init__(self, api_key):
        self.api_key = api_key

    def summarize(self, text):
        """Return a non-empty summary of `text` or raise a SummarizationError."""
        if not self.api_key:
            raise ConfigurationMissing("%s API key is not set" % self.name)
        if not isinstance(text, str) or not text.strip():
            raise EmptyInput("article content is empty")
        summary = self._summarize(text)
        if not summary:
            raise EmptySummary("no summary returned by %s" % self.name)
        return summary

    def _summarize(self, text):
        raise NotImplementedError


class HuggingFaceSummarizer(Summarizer):
    name = "huggingface"

    def __init__(self, api_key, model="facebook/bart-large-cnn", timeout=SUMMARY_TIMEOUT):
        super().__init__(api_key)
        self.url = HUGGINGFACE_BASE_URL + model
        self.timeout = timeout

    def _summarize(self, text):
        headers = {"Authorization": "Bearer %s" % self.api_key, "Content-Type": "application/json"}
        try:
            resp = requests.post(self.url, json={"inputs": text}, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportFailure("failed to send request: %s" % e) from e

        logger.debug("Hugging Face API response: %s", resp.text)
        if resp.status_code != 200:
            raise UpstreamError(resp.status_code, resp.text[:200])

        try:
            payload = resp.json()
        except ValueError as e:
            raise MalformedResponse("failed to decode response: %s" % e) from e
        return self.parse_summary(payload)

    @staticmethod
    def parse_summary(payload):
        # the inference API answers with either one object or a list of candidates
        if isinstance(payload, list):
            if not payload:
                raise EmptySummary("empty candidate list")
            payload = payload[0]
        if not isinstance(payload, dict):
            raise MalformedResponse("unexpected response type: %s" % type(payload).__name__)

        text = payload.get("summary_text", payload.get("generated_text"))
        if text is None:
            raise MalformedResponse("response has no summary_text field")
        if not isinstance(text, str):
            raise MalformedResponse("summary_text is not a string")
        return text.strip()


class OpenAISummarizer(Summarizer):
    name = "openai"

    def __init__(self, api_key, model="gpt-4o-mini", timeout=SUMMARY_TIMEOUT, client=None):
        super().__init__(api_key)
        self.model = model
        self.client = client
        if self.client is None and api_key:
            # one attempt per call, no SDK-level retries
            self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def _summarize(self, text):
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": SUMMARY_PROMPT}, {"role": "user", "content": text}],
                temperature=0.3,
                max_tokens=150,
            )
        except openai.APIConnectionError as e:
            raise TransportFailure("failed to reach OpenAI: %s" % e) from e
        except openai.APIStatusError as e:
            raise UpstreamError(e.status_code, e.message) from e
        except openai.APIResponseValidationError as e:
            raise MalformedResponse("unexpected OpenAI response: %s" % e) from e

        choices = getattr(response, "choices", None)
        if choices is None:
            raise MalformedResponse("response has no choices")
        if not choices:
            raise EmptySummary("no summary returned by OpenAI")
        content = choices[0].message.content
        return content.strip() if isinstance(content, str) else ""


def build_summarizer(settings):
    if settings.summarizer == "huggingface":
        return HuggingFaceSummarizer(settings.huggingface_api_key, model=settings.huggingface_model)
    if settings.summarizer == "openai":
        return OpenAISummarizer(settings.openai_api_key, model=settings.openai_model)
    raise ValueError("unknown summarizer: %r" % settings.summarizer)
