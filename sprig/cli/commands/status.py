"""Status command - show working tree status."""

import click
from colorama import Fore, Style
from sprig.cli.helpers import open_repository
from sprig.cli.output import success, info


@click.command('status')
def status_cmd():
    """
    Show the working tree status.

    Lists staged files, tracked files that were modified or removed since
    they were staged or committed, and untracked files.
    """
    repo = open_repository()
    report = repo.status()

    click.echo(f"On branch {Fore.CYAN}{report.branch}{Style.RESET_ALL}")
    click.echo()

    sections = [
        ("Changes to be committed:", Fore.GREEN, report.staged),
        ("Modified files:", Fore.YELLOW, report.modified),
        ("Removed files:", Fore.YELLOW, report.removed),
        ("Untracked files:", Fore.RED, report.untracked),
    ]
    for title, color, names in sections:
        if not names:
            continue
        click.echo(color + title + Style.RESET_ALL)
        for name in names:
            click.echo(f"  {color}{name}{Style.RESET_ALL}")
        click.echo()

    if report.is_clean:
        click.echo(success("Nothing to commit, working tree clean"))
    elif not report.staged:
        click.echo(info("No changes added to commit (use \"sprig add\")"))
