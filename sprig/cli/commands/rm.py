"""Rm command - remove a file from the staging area."""

import click
from pathlib import Path
from sprig.cli.helpers import open_repository
from sprig.cli.output import success, abort


@click.command('rm')
@click.argument('path')
def rm_cmd(path):
    """
    Unstage a file.

    The working-tree file is kept. Staged content that no commit refers
    to is dropped from the object store.

    Examples:
        sprig rm notes.txt
    """
    repo = open_repository()

    result = repo.rm(path, cwd=Path.cwd())
    if not result.success:
        abort(result.error)

    repo.save()
    click.echo(success(f"Unstaged '{path}'"))
