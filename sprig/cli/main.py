"""Main CLI entry point for Sprig."""

import logging

import click
from colorama import init

from sprig import __version__
from sprig.cli.output import BANNER
from sprig.cli.commands import (init_cmd, add_cmd, rm_cmd, commit_cmd, branch_cmd,
                                checkout_cmd, reset_cmd, merge_cmd, log_cmd,
                                global_log_cmd, find_cmd, status_cmd, config_cmd)

# Colour output on every platform
init(autoreset=True)


class SprigGroup(click.Group):
    """Group that prints the sprig banner above its help text."""

    def format_help(self, ctx, formatter):
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=SprigGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log engine activity to stderr')
def cli(verbose):
    """Sprig - a minimal version control engine."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(rm_cmd)
cli.add_command(commit_cmd)
cli.add_command(branch_cmd)
cli.add_command(checkout_cmd)
cli.add_command(reset_cmd)
cli.add_command(merge_cmd)
cli.add_command(log_cmd)
cli.add_command(global_log_cmd)
cli.add_command(find_cmd)
cli.add_command(status_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
