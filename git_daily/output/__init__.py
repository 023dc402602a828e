"""Terminal Output Package

Everything user-facing goes through here. When stdout is piped it carries
only the summary: warnings, errors, the spinner and log records always go
to stderr, so `git daily | pbcopy` copies just the bullets.
"""

import logging
import os
import re
import shutil
import sys
import textwrap
import threading

RESET = '\033[0m'
STYLES = {
    'bold': '\033[1m',
    'dim': '\033[2m',
    'red': '\033[31m',
    'green': '\033[32m',
    'yellow': '\033[33m',
    'cyan': '\033[36m',
}


def _stream_is_tty(stream) -> bool:
    return hasattr(stream, 'isatty') and stream.isatty()


def _color_wanted() -> bool:
    # https://no-color.org, then FORCE_COLOR, then "is anybody looking?"
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not (_stream_is_tty(sys.stdout) or _stream_is_tty(sys.stderr)):
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            # ENABLE_VIRTUAL_TERMINAL_PROCESSING on the stdout handle
            return bool(kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7))
        except (AttributeError, OSError):
            return False
    return True


def _can_encode(text: str) -> bool:
    try:
        text.encode(sys.stdout.encoding or 'utf-8')
    except (UnicodeEncodeError, LookupError):
        return False
    return True


COLORS_ENABLED = _color_wanted()
# Legacy Windows consoles (cp1252) cannot print the box and status glyphs
UNICODE_ENABLED = sys.platform != 'win32' or _can_encode('✓✗→•─│┌┐└┘⚠')

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
WARN = '⚠' if UNICODE_ENABLED else '[!]'
ARROW = '→' if UNICODE_ENABLED else '->'
BULLET = '•' if UNICODE_ENABLED else '*'


def style(text: str, *names: str) -> str:
    if not COLORS_ENABLED or not names:
        return text
    return ''.join(STYLES[name] for name in names) + text + RESET


def success(text: str) -> str:
    return style(text, 'green')


def error(text: str) -> str:
    return style(text, 'red')


def warning(text: str) -> str:
    return style(text, 'yellow')


def info(text: str) -> str:
    return style(text, 'cyan')


def dim(text: str) -> str:
    return style(text, 'dim')


def bold(text: str) -> str:
    return style(text, 'bold')


def print_success(message: str, file=None) -> None:
    print(f"{success(CHECK)} {message}", file=file or sys.stdout)


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning(WARN)} {warning(message)}", file=sys.stderr)


# ---------------------------------------------------------------------------
# Summary box
# ---------------------------------------------------------------------------

_BULLET_RE = re.compile(r'^\s*(?:[-*•]|\d+[.)])\s+')


def normalize_bullets(text: str) -> list[str]:
    """One '• ' bullet per line, whatever list marker the model chose."""
    lines = []
    for line in text.split('\n'):
        if not line.strip():
            continue
        lines.append(_BULLET_RE.sub(f'{BULLET} ', line.rstrip(), count=1))
    return lines


def _box_width() -> int:
    term_width = shutil.get_terminal_size((80, 24)).columns
    # "│ " + " │"
    return max(int(term_width * 0.8), 60) - 4


def print_box(summary: str, title: str | None = None) -> None:
    """Frame the standup bullets; wrapped bullet text hangs under the first word."""
    max_width = _box_width()
    hang = ' ' * (len(BULLET) + 1)

    rows = []
    for line in normalize_bullets(summary):
        indent = hang if line.startswith(f'{BULLET} ') else ''
        rows.extend(textwrap.wrap(line, width=max_width, subsequent_indent=indent) or [''])
    if not rows:
        rows = ['']

    label = f' {title} ' if title else ''
    width = max(max(len(row) for row in rows), len(label))

    h, v, corners = ('─', '│', '┌┐└┘') if UNICODE_ENABLED else ('-', '|', '++++')
    fill = h * (width - len(label))
    print(dim(corners[0] + h) + (bold(label) if label else '') + dim(fill + h + corners[1]))
    for row in rows:
        print(f"{dim(v)} {row.ljust(width)} {dim(v)}")
    print(dim(corners[2] + h * (width + 2) + corners[3]))


# ---------------------------------------------------------------------------
# Logging and spinner
# ---------------------------------------------------------------------------

def setup_logging(verbose: bool = False) -> logging.Logger:
    """Route git_daily diagnostics to stderr. DEBUG with --verbose, else WARNING."""
    logger = logging.getLogger('git_daily')
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


class Spinner:
    """Spinner on stderr while waiting for the API. Silent unless stderr is a terminal."""
    FRAMES = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏' if UNICODE_ENABLED else '-\\|/'

    def __init__(self, message: str = ''):
        self.message = message
        self.stream = sys.stderr
        self._thread = None
        self._stop = threading.Event()

    def _spin(self):
        idx = 0
        while not self._stop.wait(0.08):
            frame = self.FRAMES[idx % len(self.FRAMES)]
            self.stream.write(f'\r\033[K{info(frame)} {dim(self.message)}')
            self.stream.flush()
            idx += 1

    def __enter__(self):
        if _stream_is_tty(self.stream):
            self._stop.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *exc):
        self._stop.set()
        if self._thread:
            self._thread.join()
            self._thread = None
            self.stream.write('\r\033[K')
            self.stream.flush()
        return False


__all__ = [
    "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "WARN", "ARROW", "BULLET",
    "style", "success", "error", "warning", "info", "dim", "bold",
    "print_success", "print_error", "print_warning",
    "normalize_bullets", "print_box",
    "setup_logging", "Spinner",
]
