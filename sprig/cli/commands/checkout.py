"""Checkout command - switch branches."""

import click
from sprig.cli.helpers import open_repository
from sprig.cli.output import success, info, warning, abort


@click.command('checkout')
@click.argument('branch')
def checkout_cmd(branch):
    """
    Switch to a branch and restore its files.

    Staged changes are discarded.

    Examples:
        sprig checkout feature
    """
    repo = open_repository()
    pending = repo.staging.count()

    result = repo.checkout(branch)
    if not result.success:
        abort(result.error)

    repo.save()
    if pending:
        click.echo(warning(f"Discarded {pending} staged file(s)"))
    click.echo(success(f"Switched to branch '{branch}'"))
    click.echo(info(f"Updated {result.value} file(s)"))
