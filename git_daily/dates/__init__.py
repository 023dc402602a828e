"""Date Range Package"""

from git_daily.dates.resolver import (
    TimeWindow,
    resolve,
    parse_day_token,
    normalize_caret,
    full_day_window,
    default_window,
    DEFAULT_SINCE_HOUR,
    TIMESTAMP_FORMAT,
)

__all__ = [
    "TimeWindow",
    "resolve",
    "parse_day_token",
    "normalize_caret",
    "full_day_window",
    "default_window",
    "DEFAULT_SINCE_HOUR",
    "TIMESTAMP_FORMAT",
]
