"""CLI Argument Parsing"""

import argparse
import sys

import argcomplete

from git_daily import PROVIDER_NAMES, __version__

EPILOG = """examples:
  git daily                              # since yesterday 18:00
  git daily day^1                        # yesterday, full day
  git daily day^2                        # two days ago
  git daily day^1 "focus on layout"      # with context
  git daily --print-range                # print date range only

Both ^ and ˆ (macOS modifier key) are accepted (day^1 = dayˆ1).

environment:
  OPENAI_API_KEY     your OpenAI API key (required unless --print-range)
  ANTHROPIC_API_KEY  your Anthropic API key (with --provider claude)"""


class _HelpAction(argparse.Action):
    """Print help and exit 1."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help()
        parser.exit(1)


class DailyArgumentParser(argparse.ArgumentParser):
    """Usage errors exit 1 instead of argparse's 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = DailyArgumentParser(
        prog='git-daily',
        description='Summarize your recent git commits into a standup report',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )

    parser.add_argument('-h', '--help', action=_HelpAction, help='Show this help message and exit')
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Window and context: order-independent words
    parser.add_argument('words', nargs='*', metavar='day^N|context', help='Day to summarize and/or free-text context')
    parser.add_argument('--print-range', action='store_true', help='Print the resolved date range and exit')

    # Summary options
    parser.add_argument('-a', '--author', type=str, metavar='NAME', help='Commit author (default: git user.name)')
    parser.add_argument('-p', '--provider', type=str, choices=PROVIDER_NAMES, help='LLM provider')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name')

    # Output options
    parser.add_argument('--copy', action='store_true', help='Copy the summary to the clipboard')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging and token usage')

    # Setup/config
    parser.add_argument('--setup', action='store_true', help='Configure defaults, API key and git alias')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--check-key', action='store_true', help='Validate OPENAI_API_KEY against the API')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    return parser


def split_words(words: list[str]) -> tuple[str | None, str | None]:
    """Sort positional words into (day_token, context). Last of each kind wins."""
    day_token = None
    context = None
    for word in words:
        if word.startswith('day'):
            day_token = word
        else:
            context = word
    return day_token, context


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_intermixed_args(argv)
    args.day_token, args.context = split_words(args.words)
    return args
