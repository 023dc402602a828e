"""
git-daily

AI-powered standup summaries from your recent git commits.
"""

__version__ = "1.0.0"

# Providers with a hosted chat API - single source of truth
# Used by: llm/__init__.py (registry), config (validation), cli/args.py (argparse)
PROVIDERS = {
    'openai': 'OpenAI chat completions (OPENAI_API_KEY)',
    'claude': 'Anthropic Claude messages (ANTHROPIC_API_KEY)',
}

PROVIDER_NAMES = list(PROVIDERS.keys())

# Environment variable holding each provider's API key
API_KEY_ENV = {
    'openai': 'OPENAI_API_KEY',
    'claude': 'ANTHROPIC_API_KEY',
}
