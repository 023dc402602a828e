"""LLM Client Package"""

from git_daily.llm.base import LLMClient, LLMResponse, LLMError, TEMPERATURE, MAX_TOKENS, DEFAULT_TIMEOUT
from git_daily.llm.claude import ClaudeClient
from git_daily.llm.openai_client import OpenAIClient, validate_api_key

PROVIDERS = {
    "openai": OpenAIClient,
    "claude": ClaudeClient,
}


def get_client(provider: str = "openai", model: str | None = None,
               api_key: str | None = None, timeout: float | None = None) -> LLMClient:
    """Get a summary client. Provider can be 'openai' or 'claude'."""
    if provider in PROVIDERS:
        return PROVIDERS[provider](api_key=api_key, model=model, timeout=timeout)

    raise LLMError(f"Unknown provider: {provider}. Use 'openai' or 'claude'.")


def summarize(commits: str, hint: str | None = None, api_key: str | None = None,
              model: str | None = None, provider: str = "openai") -> str:
    """One-shot summary: build a client, send one request, return the text."""
    client = get_client(provider=provider, model=model, api_key=api_key)
    return client.summarize(commits, hint).content


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "OpenAIClient",
    "ClaudeClient",
    "get_client",
    "summarize",
    "validate_api_key",
    "PROVIDERS",
    "TEMPERATURE",
    "MAX_TOKENS",
    "DEFAULT_TIMEOUT",
]
