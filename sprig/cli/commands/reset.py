"""Reset command - move the current branch to a commit."""

import click
from sprig.cli.helpers import open_repository
from sprig.cli.output import success, abort


@click.command('reset')
@click.argument('commit')
def reset_cmd(commit):
    """
    Reset the current branch to COMMIT and restore its files.

    COMMIT may be a commit id, an abbreviation of one, or the full digest
    it was derived from. The branch can move forward, backward or sideways.

    Examples:
        sprig reset 1a2b3c
    """
    repo = open_repository()

    result = repo.reset(commit)
    if not result.success:
        abort(result.error)

    repo.save()
    click.echo(success(f"HEAD is now at {result.value.id} {result.value.message}"))
