"""Commit command - create a commit from staged changes."""

import click
from sprig.cli.helpers import open_repository
from sprig.cli.output import success, abort


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
@click.option('--author', default=None, help='Override the configured author')
def commit_cmd(message, author):
    """
    Record staged changes as a new commit on the current branch.

    Examples:
        sprig commit -m "Add parser"
        sprig commit -m "Fix typo" --author "Ann <ann@example.com>"
    """
    repo = open_repository()

    result = repo.commit(message, author=author)
    if not result.success:
        abort(result.error)

    repo.save()
    commit = result.value
    click.echo(success(f"[{repo.graph.head} {commit.id}] {message}"))
    click.echo(f"  {len(commit.snapshot)} file(s) in snapshot")
