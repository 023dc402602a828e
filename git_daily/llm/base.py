"""LLM Base Classes and Shared Code"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from git_daily.prompts import PromptBuilder, SummaryRequest

# Shared generation settings: near-deterministic, short output
TEMPERATURE = 0.1
MAX_TOKENS = 512
DEFAULT_TIMEOUT = 30


@dataclass
class LLMResponse:
    """Structured response from any LLM provider."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class LLMClient(ABC):
    """Abstract base for summary clients."""

    prompt_builder = PromptBuilder()

    def summarize(self, commits: str, hint: str | None = None) -> LLMResponse:
        request = SummaryRequest(commit_text=commits, context_hint=hint)
        return self.generate(request)

    @abstractmethod
    def generate(self, request: SummaryRequest) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass


def require_content(content: str | None, provider: str) -> str:
    """Reject a response without summary text."""
    if not content or not content.strip():
        raise LLMError(f"{provider} response did not include a summary")
    return content.strip()
