"""Git Log - Fetch one author's commits inside a time window."""

import logging
import subprocess
from pathlib import Path

from git_daily.dates import TimeWindow

logger = logging.getLogger(__name__)

# Commit timestamp, a NUL separator, then the line that ends up in the prompt
LOG_FORMAT = "%ct%x00- %h %s"


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitLog:
    """Reads commit history from the repository in `cwd`."""

    def __init__(self, cwd: str | Path | None = None):
        self.cwd = cwd
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        logger.debug("Running: git %s", ' '.join(args))
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def current_author(self) -> str | None:
        """The configured user.name, or None when unset."""
        try:
            name = self._run_git('config', 'user.name').strip()
        except GitError:
            return None
        return name or None

    def has_commits(self) -> bool:
        """False for a freshly initialized repository with no commits on HEAD."""
        try:
            self._run_git('rev-parse', '--verify', '-q', 'HEAD')
        except GitError:
            return False
        return True

    def fetch_commits(self, author: str, window: TimeWindow) -> list[str]:
        """Return '- <hash> <subject>' lines, most recent first.

        `git log --until` is inclusive, so commits stamped exactly at
        window.until are dropped here to keep the window half-open.
        """
        if not self.has_commits():
            logger.debug("HEAD has no commits yet")
            return []

        since, until = window.format()
        output = self._run_git(
            '--no-pager', 'log',
            '--fixed-strings',
            f'--author={author}',
            f'--since={since}',
            f'--until={until}',
            f'--pretty=format:{LOG_FORMAT}',
        )

        until_ts = int(window.until.timestamp())
        commits = []
        for line in output.splitlines():
            if not line.strip():
                continue
            stamp, _, entry = line.partition('\x00')
            if stamp.isdigit() and int(stamp) >= until_ts:
                continue
            commits.append(entry)

        logger.debug("Found %d commits by %r in %s", len(commits), author, window)
        return commits


def fetch_commits(author: str, window: TimeWindow, cwd: str | Path | None = None) -> list[str]:
    return GitLog(cwd=cwd).fetch_commits(author, window)
