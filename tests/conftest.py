"""Shared fixtures: a frozen clock, a fake git log and a stubbed HTTP endpoint."""

import json
from datetime import datetime

import httpx
import pytest

from git_daily.config import Config, ENV_OVERRIDES

NOW = datetime(2024, 3, 15, 10, 30, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clean_env(monkeypatch):
    """No API keys or GIT_DAILY_* overrides leaking in from the developer's shell."""
    for var in list(ENV_OVERRIDES) + ["OPENAI_API_KEY", "ANTHROPIC_API_KEY", "OPENAI_BASE_URL"]:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def fake_git():
    """Return a factory for GitLog stand-ins that record their calls."""
    def _make(commits=None, author="Julio Lima", error=None):
        class FakeGitLog:
            calls = []

            def __init__(self, cwd=None):
                if error:
                    raise error

            def current_author(self):
                return author

            def fetch_commits(self, author, window):
                FakeGitLog.calls.append((author, window))
                return list(commits or [])

        return FakeGitLog
    return _make


@pytest.fixture
def stub_api():
    """Return a factory for an httpx transport that answers chat completions.

    The transport records every request on `.requests`.
    """
    def _make(body=None, status=200, content=None, exc=None):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if exc is not None:
                raise exc("stubbed failure", request=request)
            if content is not None:
                return httpx.Response(status, content=content, headers={"content-type": "application/json"})
            return httpx.Response(status, json=body if body is not None else {})

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport
    return _make


@pytest.fixture
def chat_body():
    """Build a minimal chat-completions response body."""
    def _make(content):
        return {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 0,
            "model": "gpt-4o-mini",
            "choices": [{
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }],
            "usage": {"prompt_tokens": 40, "completion_tokens": 12, "total_tokens": 52},
        }
    return _make


@pytest.fixture
def read_json():
    """Decode the JSON body of a recorded request."""
    def _read(request: httpx.Request) -> dict:
        return json.loads(request.content.decode("utf-8"))
    return _read


@pytest.fixture
def default_config():
    return Config()
