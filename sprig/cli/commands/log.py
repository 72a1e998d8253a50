"""Log commands - show commit history."""

import click
from sprig.cli.helpers import open_repository
from sprig.cli.output import format_commit, info


@click.command('log')
@click.option('--oneline', is_flag=True, help='Show each commit on a single line')
def log_cmd(oneline):
    """
    Show history of the current branch, newest first.

    Only first parents are followed.

    Examples:
        sprig log
        sprig log --oneline
    """
    repo = open_repository()

    for commit in repo.log():
        if oneline:
            summary = commit.message.partition('\n')[0]
            click.echo(f"{commit.id} {summary}")
        else:
            click.echo(format_commit(commit, is_head=repo.graph.is_head(commit)))
            click.echo()


@click.command('global-log')
def global_log_cmd():
    """Show every commit in the repository, oldest first."""
    repo = open_repository()

    for commit in repo.global_log():
        click.echo(format_commit(commit, is_head=repo.graph.is_head(commit)))
        click.echo()


@click.command('find')
@click.argument('message')
def find_cmd(message):
    """
    Show the ids of commits with exactly MESSAGE.

    Examples:
        sprig find "initial commit"
    """
    repo = open_repository()

    matches = repo.find(message)
    if not matches:
        click.echo(info("Found no commit with that message"))
        return
    for commit in matches:
        click.echo(commit.id)
