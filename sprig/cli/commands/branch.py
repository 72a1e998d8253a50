"""Branch command - manage branches."""

import click
from colorama import Fore, Style
from sprig.cli.helpers import open_repository
from sprig.cli.output import success, abort


@click.command('branch')
@click.argument('name', required=False)
@click.option('-d', '--delete', is_flag=True, help='Delete the branch')
def branch_cmd(name, delete):
    """
    List, create, or delete branches.

    Examples:
        sprig branch                # List branches
        sprig branch feature        # Create 'feature' at the current commit
        sprig branch -d feature     # Delete 'feature'
    """
    repo = open_repository()
    graph = repo.graph

    if not name:
        if delete:
            click.echo("Branch name required")
            raise click.Abort()
        for branch, commit_id in graph.list_branches():
            message = graph.commits[commit_id].message.split('\n')[0]
            if branch == graph.head:
                click.echo(f"* {Fore.GREEN}{branch}{Style.RESET_ALL} {commit_id} {message}")
            else:
                click.echo(f"  {branch} {commit_id} {message}")
        return

    if delete:
        result = graph.delete_branch(name)
        if not result.success:
            abort(result.error)
        repo.save()
        click.echo(success(f"Deleted branch '{name}' (was {result.value})"))
        return

    result = graph.add_branch(name)
    if not result.success:
        abort(result.error)
    repo.save()
    click.echo(success(f"Created branch '{name}' at {result.value}"))
