"""Allow running as: python -m git_daily"""

from git_daily.cli.main import run

if __name__ == "__main__":
    run()
