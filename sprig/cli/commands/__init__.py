"""CLI commands for Sprig."""

from sprig.cli.commands.init import init_cmd
from sprig.cli.commands.add import add_cmd
from sprig.cli.commands.rm import rm_cmd
from sprig.cli.commands.commit import commit_cmd
from sprig.cli.commands.branch import branch_cmd
from sprig.cli.commands.checkout import checkout_cmd
from sprig.cli.commands.reset import reset_cmd
from sprig.cli.commands.merge import merge_cmd
from sprig.cli.commands.log import log_cmd, global_log_cmd, find_cmd
from sprig.cli.commands.status import status_cmd
from sprig.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'add_cmd', 'rm_cmd', 'commit_cmd', 'branch_cmd', 'checkout_cmd',
           'reset_cmd', 'merge_cmd', 'log_cmd', 'global_log_cmd', 'find_cmd',
           'status_cmd', 'config_cmd']
