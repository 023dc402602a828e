"""Date Range Resolver - Turn a day token into a commit time window."""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

logger = logging.getLogger(__name__)

# Some keyboard layouts (macOS dead keys) type U+02C6 instead of '^'
MODIFIER_CIRCUMFLEX = 'ˆ'

DAY_TOKEN_RE = re.compile(r'^day\^([0-9]+)$')

DEFAULT_SINCE_HOUR = 18
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [since, until) in naive local time."""
    since: datetime
    until: datetime

    def __post_init__(self):
        if self.since >= self.until:
            raise ValueError(f"Empty time window: {self.since} .. {self.until}")

    @property
    def duration(self) -> timedelta:
        return self.until - self.since

    def format(self) -> tuple[str, str]:
        """Return (since, until) formatted the way git and the range printout expect."""
        return self.since.strftime(TIMESTAMP_FORMAT), self.until.strftime(TIMESTAMP_FORMAT)

    def __str__(self) -> str:
        since, until = self.format()
        return f"{since} .. {until}"


def normalize_caret(text: str) -> str:
    return text.replace(MODIFIER_CIRCUMFLEX, '^')


def parse_day_token(token: str | None) -> int:
    """Parse 'day' or 'day^N' into N. Anything else is 0 (use the default window)."""
    if not token:
        return 0

    token = normalize_caret(token)
    if token == 'day':
        return 1

    match = DAY_TOKEN_RE.match(token)
    if match:
        return int(match.group(1))

    logger.debug("Unrecognized day token %r, using default window", token)
    return 0


def full_day_window(days_ago: int, now: datetime | None = None) -> TimeWindow:
    """24h window for one past calendar day.

    days_ago=1 -> [yesterday 00:00, today 00:00)
    days_ago=2 -> [2 days ago 00:00, yesterday 00:00)
    """
    if days_ago < 1:
        raise ValueError(f"days_ago must be >= 1, got {days_ago}")

    today = (now or datetime.now()).date()
    since = datetime.combine(today - timedelta(days=days_ago), time.min)
    until = datetime.combine(today - timedelta(days=days_ago - 1), time.min)
    return TimeWindow(since=since, until=until)


def default_window(now: datetime | None = None, since_hour: int = DEFAULT_SINCE_HOUR) -> TimeWindow:
    """From yesterday evening until now."""
    now = now or datetime.now()
    yesterday = now.date() - timedelta(days=1)
    since = datetime.combine(yesterday, time(hour=since_hour))
    return TimeWindow(since=since, until=now)


def resolve(token: str | None = None, now: datetime | None = None,
            since_hour: int = DEFAULT_SINCE_HOUR) -> TimeWindow:
    """Resolve a CLI day token into the window used to filter git log."""
    now = now or datetime.now()
    days = parse_day_token(token)

    # Days before date.min cannot be represented
    if days > (now.date() - date.min).days:
        logger.debug("Day token %r reaches past %s, using default window", token, date.min)
        days = 0

    if days > 0:
        window = full_day_window(days, now=now)
    else:
        window = default_window(now=now, since_hour=since_hour)

    logger.debug("Resolved token %r (days=%d) to %s", token, days, window)
    return window
