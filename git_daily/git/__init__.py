"""Git Operations Package"""

from git_daily.git.log import GitLog, GitError, fetch_commits

__all__ = [
    "GitLog",
    "GitError",
    "fetch_commits",
]
