"""Shared helpers for CLI commands."""

from sprig.core.errors import ErrorKind, SprigError
from sprig.core.repository import Repository
from sprig.cli.output import abort


def open_repository() -> Repository:
    """
    Find the enclosing repository and load its state.

    Raises:
        click.Abort: If the current directory is not inside a repository
    """
    repo = Repository.find_repository()
    if not repo:
        abort(SprigError(ErrorKind.NOT_A_REPOSITORY, "Not a sprig repository"))
    return repo.load()
