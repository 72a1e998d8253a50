"""Config command - manage repository configuration."""

import click
from sprig.core.config import Config, split_key
from sprig.core.repository import Repository
from sprig.cli.output import success, error, info


def _config(is_global: bool) -> Config:
    if is_global:
        return Config()
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a sprig repository (use --global for global config)"))
        raise click.Abort()
    return repo.config


def _split(key: str) -> tuple:
    try:
        return split_key(key)
    except ValueError as e:
        click.echo(error(str(e)))
        raise click.Abort()


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        sprig config set user.name "Your Name"
        sprig config set core.commitidlength 40
        sprig config set --global user.email "you@example.com"
    """
    section, option = _split(key)
    _config(is_global).set(section, option, value, global_config=is_global)
    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
def config_get(key):
    """
    Get a config value (environment, repository, then global).

    Examples:
        sprig config get user.name
    """
    section, option = _split(key)
    repo = Repository.find_repository()
    config = repo.config if repo else Config()

    value = config.get(section, option)
    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('list')
def config_list():
    """List all config values."""
    repo = Repository.find_repository()
    config = repo.config if repo else Config()

    values = config.list_all()
    if not values:
        click.echo(info("No configuration set"))
        return
    for section, items in sorted(values.items()):
        for key, value in sorted(items.items()):
            click.echo(f"{section}.{key}={value}")
