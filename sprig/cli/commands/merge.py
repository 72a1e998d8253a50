"""Merge command for Sprig VCS."""

import click
from sprig.core.errors import ErrorKind
from sprig.cli.helpers import open_repository
from sprig.cli.output import success, error, info, abort


@click.command('merge')
@click.argument('branch')
def merge_cmd(branch):
    """
    Merge a branch into the current branch.

    Fast-forwards when the current branch is behind BRANCH; otherwise a
    merge commit with two parents is created and both branches move to it.
    Conflicting changes abort the merge without changing anything.

    Examples:
        sprig merge feature
    """
    repo = open_repository()
    current_branch = repo.graph.head

    click.echo(info(f"Merging branch '{branch}' into '{current_branch}'..."))
    result = repo.merge(branch)

    if not result.success:
        if result.kind == ErrorKind.MERGE_CONFLICT:
            click.echo(error(f"CONFLICT (content): Merge conflict in {result.error.path}"))
            click.echo(info("Nothing was changed; reconcile the file on one branch and retry"))
            raise click.Abort()
        abort(result.error)

    merge_result = result.value
    if merge_result.is_up_to_date:
        click.echo(success("Already up to date"))
        return

    repo.save()
    if merge_result.is_fast_forward:
        click.echo(success(f"Fast-forward merge to {merge_result.commit.id}"))
    else:
        click.echo(success(f"Merge commit created: {merge_result.commit.id}"))
        click.echo(success(f"Merged '{branch}' into '{current_branch}'"))
