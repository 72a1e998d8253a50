"""Add command - stage files for commit."""

import click
from pathlib import Path
from sprig.cli.helpers import open_repository
from sprig.cli.output import success, info, abort


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Directories are added recursively. Dot-files and paths matching
    .sprigignore are skipped.

    Examples:
        sprig add file.txt
        sprig add src
        sprig add .
    """
    repo = open_repository()

    result = repo.add(paths, cwd=Path.cwd())
    if not result.success:
        abort(result.error)

    repo.save()
    if not result.value:
        click.echo(info("Nothing to add"))
        return
    for name in result.value:
        click.echo(info(f"add '{name}'"))
    click.echo(success(f"Staged {len(result.value)} file(s)"))
