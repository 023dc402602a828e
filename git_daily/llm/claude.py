"""Claude (Anthropic) LLM Client"""

import os

from git_daily.llm.base import (
    LLMClient, LLMResponse, LLMError, require_content,
    TEMPERATURE, MAX_TOKENS, DEFAULT_TIMEOUT,
)
from git_daily.prompts import SummaryRequest


class ClaudeClient(LLMClient):
    """Claude API client. Requires ANTHROPIC_API_KEY env var."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"

    def __init__(self, api_key: str | None = None, model: str | None = None,
                 timeout: float | None = None, http_client=None):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout or DEFAULT_TIMEOUT

        if not self.api_key:
            raise LLMError(
                "No API key found. Set ANTHROPIC_API_KEY environment variable:\n"
                "  export ANTHROPIC_API_KEY='your-key-here'"
            )

        try:
            from anthropic import Anthropic
            self._client = Anthropic(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0,
                http_client=http_client,
            )
        except ImportError:
            raise LLMError(
                "Anthropic SDK not installed. Run:\n"
                "  pip install anthropic"
            )

    @property
    def name(self) -> str:
        return f"Claude ({self.model})"

    def generate(self, request: SummaryRequest) -> LLMResponse:
        from anthropic import APIError, APIStatusError, APITimeoutError, AuthenticationError

        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                system=self.prompt_builder.system_prompt(),
                messages=[{"role": "user", "content": self.prompt_builder.user_message(request)}]
            )
        except AuthenticationError:
            raise LLMError("Invalid API key. Check your ANTHROPIC_API_KEY.")
        except APITimeoutError:
            raise LLMError(f"Request timed out after {self.timeout}s")
        except APIStatusError as e:
            raise LLMError(f"Claude API error ({e.status_code}): {e.message}")
        except APIError as e:
            raise LLMError(f"Claude API error: {e.message}")

        content = None
        for block in response.content or []:
            if getattr(block, "type", None) == "text":
                content = block.text
                break

        usage = getattr(response, "usage", None)
        return LLMResponse(
            content=require_content(content, "Claude"),
            model=self.model,
            tokens_used=(usage.input_tokens + usage.output_tokens) if usage else 0
        )
