"""Initialize a new Sprig repository."""

import click
from pathlib import Path
from sprig.core.repository import Repository
from sprig.cli.output import success, info, abort


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new Sprig repository.

    Creates a .sprig directory and records an empty initial commit on
    branch 'master'.

    Examples:
        sprig init                  # Initialize in current directory
        sprig init my-project       # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()
    if not repo_path.exists():
        repo_path.mkdir(parents=True)
        click.echo(info(f"Created directory {repo_path}"))

    repo = Repository(str(repo_path))
    result = repo.init()
    if not result.success:
        abort(result.error)

    click.echo(success(f"Initialized empty Sprig repository in {repo.sprig_dir}"))
    click.echo(info(f"Initial commit {result.value.id} on branch '{repo.graph.head}'"))
