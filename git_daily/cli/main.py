"""CLI Main Entry Point"""

import logging
import os
import sys
import time

from git_daily import API_KEY_ENV
from git_daily.config import load_config
from git_daily.dates import TimeWindow, resolve as resolve_window
from git_daily.git import GitLog, GitError
from git_daily.llm import get_client, LLMError
from git_daily.output import (
    info, dim, bold, print_error, print_success, print_warning, print_box, setup_logging, Spinner, ARROW,
)

from git_daily.cli.args import parse_args
from git_daily.cli.commands import display_config, run_setup, run_install_completion, run_check_key
from git_daily.cli.utils import clean_summary, copy_to_clipboard

logger = logging.getLogger(__name__)


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    if args.setup:
        return run_setup(), True
    if args.check_key:
        return run_check_key(), True
    return 0, False


def _print_range(window: TimeWindow) -> int:
    since, until = window.format()
    print(f"Range {ARROW} {since} .. {until}")
    return 0


def _require_api_key(provider: str) -> str | None:
    """Return the provider's API key, or report how to fix it and return None."""
    env_var = API_KEY_ENV[provider]
    api_key = os.environ.get(env_var, '').strip()
    if api_key:
        return api_key

    print_error(f"Error: {env_var} is not set or is empty.")
    print("Tip: use '--print-range' to test date ranges without the API key.", file=sys.stderr)
    return None


def _collect_commits(args, config, window, is_pipe):
    """Look up the author and fetch their commits.

    Returns:
        list[str] | None: commit lines, or None after reporting an error
    """
    try:
        git_log = GitLog()
        author = args.author or config.author or git_log.current_author()
        if not author:
            print_error("No commit author configured. Use --author, set GIT_DAILY_AUTHOR, "
                        "or run: git config user.name 'Your Name'")
            return None

        since, until = window.format()
        if not is_pipe:
            print(f"{info(ARROW)} Fetching commits by {bold(author)} from {since} to {until}")
        return git_log.fetch_commits(author, window)
    except GitError as e:
        print_error(str(e))
        return None


def _display_commits(commits):
    print(bold("Commits found:"))
    for line in commits:
        print(dim(f"  {line}"))
    print()


def _copy_and_report(summary, is_pipe):
    copied, reason = copy_to_clipboard(summary)
    if copied:
        # stdout carries only the summary when piped
        print_success("Copied to clipboard!", file=sys.stderr if is_pipe else None)
    else:
        print_warning(f"Could not copy to clipboard{': ' + reason if reason else ''}")


def _print_verbose_stats(args, is_pipe, response, timings):
    """Print verbose timing and token statistics."""
    if not args.verbose or is_pipe:
        return
    print()
    print(dim(f"  Model: {response.model}"))
    print(dim(f"  Response: {response.tokens_used} tokens"))
    print(dim(f"  Timings: git={timings['git']:.2f}s, generate={timings.get('generate', 0):.2f}s"))


def _summarize_flow(args, config, provider, api_key, window) -> int:
    """Fetch commits and print their summary.

    Returns:
        int: Exit code
    """
    is_pipe = not sys.stdout.isatty()
    timings = {}

    t0 = time.time()
    commits = _collect_commits(args, config, window, is_pipe)
    timings['git'] = time.time() - t0
    if commits is None:
        return 1

    if not commits:
        print("No commits found in the given range.")
        return 0

    if not is_pipe:
        _display_commits(commits)

    model = args.model or config.model
    try:
        client = get_client(provider=provider, model=model, api_key=api_key, timeout=config.timeout)
        if not is_pipe:
            print(f"Sending {len(commits)} commits to {info(client.name)} for summarization...")

        t0 = time.time()
        with Spinner(f"Waiting for {client.name}"):
            response = client.summarize("\n".join(commits), args.context)
        timings['generate'] = time.time() - t0
    except LLMError as e:
        print_error(str(e))
        return 1

    summary = clean_summary(response.content)
    logger.debug("Summary received (%d chars, %d tokens)", len(summary), response.tokens_used)

    if is_pipe:
        print(summary)
    else:
        print()
        print_box(summary, title=f"Standup {window}")

    _print_verbose_stats(args, is_pipe, response, timings)

    if args.copy:
        _copy_and_report(summary, is_pipe)

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    # Precedence: CLI args > environment variables > config file
    config = load_config().apply_env()
    provider = args.provider or config.provider

    window = resolve_window(args.day_token, since_hour=config.since_hour)
    if args.print_range:
        return _print_range(window)

    api_key = _require_api_key(provider)
    if api_key is None:
        return 1

    return _summarize_flow(args, config, provider, api_key, window)


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print()
        sys.exit(130)
