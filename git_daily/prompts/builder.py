"""Prompt Builder - Construct LLM messages for standup summaries."""

from dataclasses import dataclass

SYSTEM_PROMPT = """You summarize Git commit logs into clear, concise standup reports. Rules:
- Merge all related commits into ONE bullet point — never repeat the same topic
- The output must have FEWER bullets than the number of commits
- Use past tense (Fixed, Added, Updated, Removed)
- Focus on WHAT changed and WHY, not HOW
- Skip trivial details like version bumps, typo fixes, or merge commits
- Keep each bullet to one line
- Output only the bullet points, no headers or extra text
- Aim for 2-5 bullet points maximum, regardless of how many commits there are
- If extra context is provided, use it to guide emphasis and relevance"""

USER_PREAMBLE = "Summarize these commits for a daily standup:"


@dataclass
class SummaryRequest:
    """Commit text plus the optional steering hint from the command line."""
    commit_text: str
    context_hint: str | None = None


class PromptBuilder:
    """Builds the system/user message pair sent to every provider."""

    def build(self, request: SummaryRequest) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system_prompt()},
            {"role": "user", "content": self.user_message(request)},
        ]

    def system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def user_message(self, request: SummaryRequest) -> str:
        message = f"{USER_PREAMBLE}\n\n{request.commit_text}"
        return message + self._build_context_section(request.context_hint)

    def _build_context_section(self, hint: str | None) -> str:
        if not hint or not hint.strip():
            return ""
        return f"\n\nContext: {hint}"
