"""OpenAI Chat Completions Client"""

import logging
import os

from git_daily.llm.base import (
    LLMClient, LLMResponse, LLMError, require_content,
    TEMPERATURE, MAX_TOKENS, DEFAULT_TIMEOUT,
)
from git_daily.prompts import SummaryRequest

logger = logging.getLogger(__name__)


def _load_sdk():
    try:
        import openai
    except ImportError:
        raise LLMError(
            "OpenAI SDK not installed. Run:\n"
            "  pip install openai"
        )
    return openai


class OpenAIClient(LLMClient):
    """OpenAI API client. Requires OPENAI_API_KEY env var."""

    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(self, api_key: str | None = None, model: str | None = None,
                 timeout: float | None = None, http_client=None):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout or DEFAULT_TIMEOUT

        if not self.api_key:
            raise LLMError(
                "No API key found. Set OPENAI_API_KEY environment variable:\n"
                "  export OPENAI_API_KEY='sk-...'"
            )

        openai = _load_sdk()
        # Single attempt: the SDK retries twice by default
        self._client = openai.OpenAI(
            api_key=self.api_key,
            timeout=self.timeout,
            max_retries=0,
            http_client=http_client,
        )

    @property
    def name(self) -> str:
        return f"OpenAI ({self.model})"

    def generate(self, request: SummaryRequest) -> LLMResponse:
        openai = _load_sdk()
        messages = self.prompt_builder.build(request)
        logger.debug("Sending %d chars to %s", sum(len(m["content"]) for m in messages), self.name)

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
        except openai.AuthenticationError:
            raise LLMError("Invalid API key. Check your OPENAI_API_KEY.")
        except openai.APITimeoutError:
            raise LLMError(f"Request timed out after {self.timeout}s")
        except openai.APIConnectionError as e:
            raise LLMError(f"Could not reach the OpenAI API: {e}")
        except openai.APIStatusError as e:
            raise LLMError(f"OpenAI API error ({e.status_code}): {e.message}")
        except openai.APIError as e:
            raise LLMError(f"OpenAI API error: {e.message}")
        except ValueError as e:
            raise LLMError(f"Invalid response from the OpenAI API: {e}")

        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = require_content(getattr(message, "content", None), "OpenAI")

        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=content,
            model=getattr(response, "model", None) or self.model,
            tokens_used=getattr(usage, "total_tokens", 0) or 0,
        )


def validate_api_key(key: str | None, timeout: float = 10, http_client=None) -> bool:
    """True when the key can list models (GET /v1/models answers 200)."""
    if not key:
        return False

    openai = _load_sdk()
    client = openai.OpenAI(api_key=key, timeout=timeout, max_retries=0, http_client=http_client)
    try:
        client.models.list()
    except openai.APIError as e:
        logger.debug("API key validation failed: %s", e)
        return False
    return True
