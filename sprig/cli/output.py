"""Console formatting for Sprig commands.

Every helper returns a string; commands decide when to echo it.
"""

from datetime import datetime

import click
from colorama import Fore, Style

from sprig.core.errors import SprigError
from sprig.core.objects import Commit

BANNER = f"""
{Fore.GREEN}{Style.BRIGHT}  sprig{Style.RESET_ALL} {Fore.WHITE}- a minimal version control engine{Style.RESET_ALL}
"""


def _styled(color: str, mark: str, message: str) -> str:
    return f"{color}{mark} {message}{Style.RESET_ALL}"


def success(message: str) -> str:
    return _styled(Fore.GREEN, '✓', message)


def info(message: str) -> str:
    return _styled(Fore.CYAN, '→', message)


def warning(message: str) -> str:
    return _styled(Fore.YELLOW, '!', message)


def error(message: str) -> str:
    return _styled(Fore.RED, '✗', message)


def abort(err: SprigError) -> None:
    """Report an engine error and abort the command."""
    click.echo(error(err.message))
    raise click.Abort()


def format_timestamp(timestamp: int) -> str:
    """Format Unix timestamp to readable date."""
    return datetime.fromtimestamp(int(timestamp)).strftime("%a %b %d %H:%M:%S %Y")


def format_commit(commit: Commit, is_head: bool = False) -> str:
    """Multi-line description of a commit for log output."""
    marker = f" {Fore.CYAN}(HEAD){Style.RESET_ALL}" if is_head else ""
    lines = [f"{Fore.YELLOW}commit {commit.id}{Style.RESET_ALL}{marker}"]
    if commit.is_merge:
        lines.append(f"Merge: {commit.parent_id} {commit.second_parent_id}")
    lines.append(f"Author: {commit.author}")
    lines.append(f"Date:   {format_timestamp(commit.timestamp)}")
    lines.append("")
    lines.append(f"    {commit.message}")
    return '\n'.join(lines)
