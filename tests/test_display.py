"""
Tests for CLI output formatting.

Shows sample output for each scenario. Run with:
    pytest tests/test_display.py -v
    pytest tests/test_display.py -v -s   # see actual terminal output
"""

import contextlib
import os
import re
import sys
from datetime import datetime
from functools import partial

import pytest

from git_daily.cli import main as main_mod
from git_daily.cli.main import _display_commits, _print_range
from git_daily.config import Config
from git_daily.dates import TimeWindow, resolve
from git_daily.llm import LLMResponse
from git_daily.output import Spinner, normalize_bullets, print_box, print_error, print_success, print_warning

ANSI_RE = re.compile(r'\033\[[0-9;]*m')

COMMITS = ["- a1b2c3d fix: hydration mismatch", "- d4e5f6a feat: TM sidebar panel"]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def print_sample(capsys):
    """Return a function that replays captured output for -s viewing."""
    def _print(out: str):
        with capsys.disabled():
            try:
                print(out)
            except UnicodeEncodeError:
                cleaned = ANSI_RE.sub('', out)
                print(cleaned.encode('ascii', errors='replace').decode('ascii'))
    return _print


@pytest.fixture
def narrow_terminal(monkeypatch):
    monkeypatch.setattr("shutil.get_terminal_size", lambda fallback=(80, 24): os.terminal_size((40, 24)))


# ---------------------------------------------------------------------------
# Commit list and range
# ---------------------------------------------------------------------------

class TestDisplayCommits:
    """Output from _display_commits()."""

    def test_lists_every_commit(self, capsys, strip_ansi):
        _display_commits(COMMITS)
        out = strip_ansi(capsys.readouterr().out)

        assert "Commits found:" in out
        assert "  - a1b2c3d fix: hydration mismatch" in out
        assert "  - d4e5f6a feat: TM sidebar panel" in out


class TestPrintRange:

    def test_format(self, capsys, strip_ansi):
        window = TimeWindow(since=datetime(2024, 3, 13), until=datetime(2024, 3, 14))
        assert _print_range(window) == 0
        out = strip_ansi(capsys.readouterr().out)
        assert out.strip().endswith("2024-03-13T00:00:00 .. 2024-03-14T00:00:00")


# ---------------------------------------------------------------------------
# Summary box
# ---------------------------------------------------------------------------

class TestPrintBox:

    def test_lines_are_aligned(self, capsys, strip_ansi):
        print_box("• Fixed X\n• Added the TM sidebar panel")
        lines = strip_ansi(capsys.readouterr().out).rstrip("\n").split("\n")

        assert len(lines) == 4
        assert len({len(line) for line in lines}) == 1
        assert "• Fixed X" in lines[1]

    def test_long_bullet_wraps_with_indent(self, capsys, strip_ansi, narrow_terminal):
        bullet = "• " + " ".join(["refactored"] * 12)
        print_box(bullet)
        lines = strip_ansi(capsys.readouterr().out).rstrip("\n").split("\n")[1:-1]

        assert len(lines) > 1
        assert lines[0][2:].startswith("• refactored")
        assert lines[1][2:].startswith("  refactored")

    def test_empty_text(self, capsys):
        print_box("")
        assert len(capsys.readouterr().out.split("\n")) == 4

    def test_title_in_top_border(self, capsys, strip_ansi):
        print_box("• Fixed X", title="Standup 2024-03-14T00:00:00 .. 2024-03-15T00:00:00")
        lines = strip_ansi(capsys.readouterr().out).rstrip("\n").split("\n")

        assert " Standup 2024-03-14T00:00:00 .. 2024-03-15T00:00:00 " in lines[0]
        assert len({len(line) for line in lines}) == 1

    def test_mixed_markers_become_bullets(self, capsys, strip_ansi):
        print_box("- Fixed X\n\n* Added Y\n2. Removed Z")
        rows = [line[2:].rstrip(" │") for line in strip_ansi(capsys.readouterr().out).split("\n")[1:-2]]

        assert rows == ["• Fixed X", "• Added Y", "• Removed Z"]


class TestNormalizeBullets:

    @pytest.mark.parametrize("line, expected", [
        ("• Fixed X", "• Fixed X"),
        ("- Fixed X", "• Fixed X"),
        ("  * Fixed X", "• Fixed X"),
        ("1) Fixed X", "• Fixed X"),
        ("Fixed X", "Fixed X"),
        ("- fixed the -v flag", "• fixed the -v flag"),
    ])
    def test_markers(self, line, expected):
        assert normalize_bullets(line) == [expected]

    def test_drops_blank_lines(self):
        assert normalize_bullets("• A\n\n   \n• B") == ["• A", "• B"]


# ---------------------------------------------------------------------------
# Status messages stay off stdout
# ---------------------------------------------------------------------------

class TestMessageStreams:

    def test_warning_goes_to_stderr(self, capsys):
        print_warning("Could not copy to clipboard")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Could not copy to clipboard" in captured.err

    def test_error_goes_to_stderr(self, capsys):
        print_error("boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "boom" in captured.err

    def test_success_can_target_stderr(self, capsys):
        print_success("Copied", file=sys.stderr)
        assert capsys.readouterr().out == ""

    def test_spinner_is_silent_off_terminal(self, capsys):
        with Spinner("Waiting"):
            pass
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


# ---------------------------------------------------------------------------
# Full console output. Run with -s to see what users see
#   pytest tests/test_display.py::TestConsoleOutput -v -s
# ---------------------------------------------------------------------------

@pytest.fixture
def simulate_console(clean_env, now, fake_git, capsys, strip_ansi, print_sample):
    """Return a function that runs git-daily as if attached to a terminal."""
    def _simulate(argv, *, commits, summary):
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        clean_env.setattr(sys.stdout, "isatty", lambda: True)
        clean_env.setattr(main_mod, "Spinner", contextlib.nullcontext)
        clean_env.setattr(main_mod, "load_config", lambda: Config())
        clean_env.setattr(main_mod, "resolve_window", partial(resolve, now=now))
        clean_env.setattr(main_mod, "GitLog", fake_git(commits))
        clean_env.setattr(main_mod, "copy_to_clipboard", lambda text: (True, ""))

        class FakeClient:
            name = "OpenAI (gpt-4o-mini)"

            def summarize(self, commits, hint=None):
                return LLMResponse(content=summary, model="gpt-4o-mini", tokens_used=52)

        clean_env.setattr(main_mod, "get_client", lambda **kwargs: FakeClient())

        exit_code = main_mod.main(argv)
        out = capsys.readouterr().out
        print_sample(out)
        return exit_code, strip_ansi(out)
    return _simulate


class TestConsoleOutput:
    """
    Full console mock. Shows exactly what a user sees after running git daily.

    Run:  pytest tests/test_display.py::TestConsoleOutput -v -s
    """

    def test_yesterday(self, simulate_console):
        exit_code, out = simulate_console(
            ["day^1"],
            commits=COMMITS,
            summary="• Fixed the hydration mismatch\n• Added the TM sidebar panel",
        )

        assert exit_code == 0
        assert "Fetching commits by Julio Lima from 2024-03-14T00:00:00 to 2024-03-15T00:00:00" in out
        assert "- a1b2c3d fix: hydration mismatch" in out
        assert "Sending 2 commits to OpenAI (gpt-4o-mini)" in out
        assert "Standup 2024-03-14T00:00:00 .. 2024-03-15T00:00:00" in out
        assert "│ • Fixed the hydration mismatch" in out
        assert "Response:" not in out

    def test_preamble_and_fences_are_stripped(self, simulate_console):
        _, out = simulate_console(
            [],
            commits=COMMITS,
            summary="Here's your standup summary:\n```\n• Fixed X\n• Added Y\n```",
        )

        assert "standup summary" not in out
        assert "```" not in out
        assert "• Fixed X" in out

    def test_verbose_and_copy(self, simulate_console):
        _, out = simulate_console(
            ["--verbose", "--copy", "focus on layout"],
            commits=COMMITS,
            summary="• Fixed X\n• Added Y",
        )

        assert "Model: gpt-4o-mini" in out
        assert "Response: 52 tokens" in out
        assert "Copied to clipboard!" in out
