"""Prompt Construction Package"""

from git_daily.prompts.builder import PromptBuilder, SummaryRequest, SYSTEM_PROMPT, USER_PREAMBLE

__all__ = [
    "PromptBuilder",
    "SummaryRequest",
    "SYSTEM_PROMPT",
    "USER_PREAMBLE",
]
