"""CLI Utility Functions"""

import re
import shlex
import subprocess
import sys
from pathlib import Path

SHELL_RC_CANDIDATES = ('.zshrc', '.bashrc', '.bash_profile')
RC_MARKER = '# git-daily'
ALIAS_COMMAND = '!git-daily'


def clean_summary(text: str) -> str:
    """Strip code fences and preamble chatter around the bullet list."""
    lines = [line for line in text.strip().split('\n') if not line.strip().startswith('```')]

    # Drop a "Here's your standup summary:" style first line when bullets follow
    if len(lines) > 1 and lines[0].rstrip().endswith(':') and not re.match(r'^\s*[-•*]', lines[0]):
        lines = lines[1:]

    return '\n'.join(lines).strip()


def copy_to_clipboard(text: str) -> tuple[bool, str]:
    """Copy text to clipboard. Returns (success, failure_reason)."""
    try:
        if sys.platform == 'win32':
            subprocess.run(['clip'], input=text.encode('utf-8'), check=True)
        elif sys.platform == 'darwin':
            subprocess.run(['pbcopy'], input=text.encode('utf-8'), check=True)
        else:
            try:
                subprocess.run(['xclip', '-selection', 'clipboard'], input=text.encode('utf-8'), check=True)
            except FileNotFoundError:
                subprocess.run(['xsel', '--clipboard', '--input'], input=text.encode('utf-8'), check=True)
        return True, ""
    except FileNotFoundError:
        if sys.platform == 'linux':
            return False, "Install xclip or xsel: sudo apt install xclip"
        return False, "No clipboard tool found"
    except (subprocess.CalledProcessError, OSError) as e:
        return False, f"Clipboard command failed: {e}"


def detect_shell_rc(home: Path | None = None) -> Path | None:
    """First existing shell config file: ~/.zshrc, ~/.bashrc, ~/.bash_profile."""
    home = home or Path.home()
    for name in SHELL_RC_CANDIDATES:
        path = home / name
        if path.is_file():
            return path
    return None


def write_api_key_export(rc_path: Path, api_key: str, env_var: str = 'OPENAI_API_KEY') -> None:
    """Replace any earlier git-daily block in rc_path with a fresh export line."""
    lines = rc_path.read_text(encoding='utf-8').split('\n') if rc_path.exists() else []

    kept = []
    skip_next = False
    for line in lines:
        if skip_next:
            skip_next = False
            if line.startswith(f'export {env_var}='):
                continue
        if line == RC_MARKER:
            skip_next = True
            continue
        kept.append(line)

    while kept and not kept[-1].strip():
        kept.pop()

    block = [RC_MARKER, f'export {env_var}={shlex.quote(api_key)}']
    content = '\n'.join(kept + ([''] if kept else []) + block) + '\n'
    rc_path.write_text(content, encoding='utf-8')


def get_git_alias(name: str = 'daily') -> str | None:
    """Current value of git's global alias.<name>, or None."""
    try:
        result = subprocess.run(
            ['git', 'config', '--global', f'alias.{name}'],
            capture_output=True, text=True
        )
    except FileNotFoundError:
        return None
    value = result.stdout.strip()
    return value if result.returncode == 0 and value else None


def install_git_alias(name: str = 'daily', command: str = ALIAS_COMMAND) -> tuple[bool, str]:
    """Create the global `git <name>` alias. Returns (success, failure_reason)."""
    try:
        subprocess.run(
            ['git', 'config', '--global', f'alias.{name}', command],
            capture_output=True, text=True, check=True
        )
        return True, ""
    except FileNotFoundError:
        return False, "Git is not installed or not in PATH"
    except subprocess.CalledProcessError as e:
        return False, e.stderr.strip() or f"git config exited with {e.returncode}"
