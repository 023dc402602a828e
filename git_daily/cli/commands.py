"""CLI Commands"""

import os
import shlex
import sys
from dataclasses import replace

from git_daily import API_KEY_ENV
from git_daily.config import load_config, save_config, get_config_path, ENV_OVERRIDES
from git_daily.llm import OpenAIClient, ClaudeClient, validate_api_key
from git_daily.output import bold, dim, info, print_success, print_error, print_warning
from git_daily.cli.utils import (
    ALIAS_COMMAND, detect_shell_rc, get_git_alias, install_git_alias, write_api_key_export,
)


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .dailyrc found)")

    overrides = [(var, os.environ[var]) for var in ENV_OVERRIDES if os.environ.get(var)]
    if overrides:
        print(f"  {dim('Environment overrides:')}")
        for var, value in overrides:
            print(f"    {var}={value}")

    key_env = API_KEY_ENV.get(config.provider, 'OPENAI_API_KEY')
    key_state = 'set' if os.environ.get(key_env) else 'not set'

    print()
    print(f"  {bold('Settings:')}")
    print(f"    provider:    {info(config.provider)}")
    print(f"    model:       {info(config.model or 'default')}")
    print(f"    author:      {info(config.author or 'git user.name')}")
    print(f"    since_hour:  {info(str(config.since_hour))}")
    print(f"    timeout:     {info(str(config.timeout))}s")
    print(f"    {key_env}: {info(key_state)}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .dailyrc (in current directory)")
    print(f"    Global: ~/.dailyrc")
    print(f"\n  {dim('Run')} git-daily --setup {dim('to configure')}\n")

    return 0


def run_check_key() -> int:
    """Validate OPENAI_API_KEY with a lightweight model listing."""
    key = os.environ.get('OPENAI_API_KEY')
    if not key:
        print_error("OPENAI_API_KEY is not set or is empty.")
        return 1

    if validate_api_key(key):
        print_success("OPENAI_API_KEY is valid")
        return 0

    print_error("OPENAI_API_KEY was rejected by the API (or the API is unreachable)")
    return 1


def _ask(prompt: str) -> str:
    return input(prompt).strip()


def _setup_api_key(provider: str) -> None:
    """Read a key, validate it, and persist it to the shell config."""
    env_var = API_KEY_ENV[provider]
    if os.environ.get(env_var):
        print_success(f"{env_var} already set")
        return

    print()
    print_warning(f"{env_var} is not set in your environment.")
    api_key = _ask("   Enter your API key (or press Enter to skip): ")
    if not api_key:
        print_warning("Skipped API key setup. You'll need to set it later:")
        print(f'   export {env_var}="..."')
        return

    if provider == 'openai':
        if not validate_api_key(api_key):
            print_error("That key was rejected by the OpenAI API. Not saving it.")
            return
        print_success("API key is valid")

    rc_path = detect_shell_rc()
    if rc_path is None:
        print_warning("Could not detect shell config file. Add this manually:")
        print(f'   export {env_var}={shlex.quote(api_key)}')
        return

    write_api_key_export(rc_path, api_key, env_var=env_var)
    print_success(f"API key added to {rc_path}")
    print(dim(f"   Run 'source {rc_path}' or open a new terminal to activate it"))


def _setup_alias() -> None:
    current = get_git_alias()
    if current and current != ALIAS_COMMAND:
        print_warning(f"Git alias 'daily' already exists: {current}")
        if _ask("   Overwrite? [y/N] ").lower() != 'y':
            print(dim("   Skipped alias setup"))
            return

    ok, reason = install_git_alias()
    if ok:
        print_success("Git alias created → git daily")
    else:
        print_error(f"Could not create git alias: {reason}")


def run_setup() -> int:
    """Quick setup wizard."""
    display_config()
    print(f"{bold('Setup Wizard')}\n")

    try:
        print("Choose provider:\n")
        print("  1. OpenAI (default)")
        print("  2. Claude API\n")

        while True:
            choice = _ask("Select [1/2] (Enter for default): ")
            if choice in ('', '1'):
                provider = 'openai'
                break
            elif choice == '2':
                provider = 'claude'
                break

        default_model = OpenAIClient.DEFAULT_MODEL if provider == 'openai' else ClaudeClient.DEFAULT_MODEL
        model = _ask(f"\nModel (Enter for {default_model}): ") or None

        author = _ask("\nCommit author (Enter to use git user.name): ") or None

        hour_input = _ask("\nDefault window starts yesterday at hour (Enter for 18): ")
        since_hour = int(hour_input) if hour_input.isdigit() and int(hour_input) <= 23 else 18

        _setup_api_key(provider)
        print()
        _setup_alias()
    except (KeyboardInterrupt, EOFError):
        print()
        print_error("Setup cancelled")
        return 1

    # Keep settings the wizard does not ask about, such as timeout
    config = replace(load_config(), provider=provider, model=model, author=author, since_hour=since_hour)
    path = save_config(config, global_config=True)

    print_success(f"Saved to {path}")
    print_success("Done! Run 'git daily' inside any repo.")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete git-daily)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell git-daily | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish git-daily | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
