import pytest
import requests

from catalog_enrichment.core.errors import CompletionError
from catalog_enrichment.services.completion_client import CompletionClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def completion(content):
    return FakeResponse(payload={"choices": [{"message": {"content": content}}]})


class FakeSession:
    def __init__(self, replies):
        self.replies = list(replies)
        self.requests = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


MESSAGES = [{"role": "user", "content": "Analyse"}]


def test_returns_completion_content(config):
    session = FakeSession([completion('{"category": "Table"}')])
    client = CompletionClient(config, session=session, sleep=lambda s: None)

    assert client.complete(MESSAGES, max_tokens=500) == '{"category": "Table"}'

    sent = session.requests[0]
    assert sent["url"] == config.deepseek_api_url
    assert sent["headers"]["Authorization"] == "Bearer deepseek-key"
    assert sent["json"] == {
        "model": "deepseek-chat",
        "messages": MESSAGES,
        "temperature": 0.3,
        "max_tokens": 500,
    }


def test_retries_transient_failure_then_succeeds(config):
    sleeps = []
    session = FakeSession([requests.ConnectionError("reset"), completion("ok")])
    client = CompletionClient(config, session=session, sleep=sleeps.append)

    assert client.complete(MESSAGES, max_tokens=200) == "ok"
    assert len(session.requests) == 2
    assert sleeps == [1.0]


def test_gives_up_after_two_retries_with_linear_backoff(config):
    sleeps = []
    session = FakeSession([
        FakeResponse(status_code=503, text="unavailable"),
        requests.Timeout("slow"),
        FakeResponse(status_code=500, text="boom"),
    ])
    client = CompletionClient(config, session=session, sleep=sleeps.append)

    with pytest.raises(CompletionError, match="500"):
        client.complete(MESSAGES, max_tokens=200)
    assert len(session.requests) == 3
    assert sleeps == [1.0, 2.0]


def test_malformed_body_counts_as_failure(config):
    session = FakeSession([FakeResponse(payload={"unexpected": True}), completion("fine")])
    client = CompletionClient(config, session=session, sleep=lambda s: None)

    assert client.complete(MESSAGES, max_tokens=200) == "fine"


def test_missing_key_fails_without_calling(config):
    config.deepseek_api_key = None
    session = FakeSession([])
    client = CompletionClient(config, session=session, sleep=lambda s: None)

    with pytest.raises(CompletionError):
        client.complete(MESSAGES, max_tokens=200)
    assert session.requests == []
