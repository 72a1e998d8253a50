"""Core functionality for Sprig.

This module contains the versioning engine:
- Sprig objects (ContentRecord, Commit)
- Content-addressed object store
- Staging area
- Commit graph (branches, head, ancestry)
- Repository context, persistence and working-tree sync
- Configuration, hashing and error types

For merge see sprig.operations
For ignore handling and working-tree walking see sprig.utils
"""

from sprig.core.errors import ErrorKind, SprigError, SprigException, Result
from sprig.core.objects import ContentRecord, Commit
from sprig.core.hash import ContentHasher, HashlibHasher
from sprig.core.object_store import ObjectStore
from sprig.core.index import StagingArea
from sprig.core.graph import CommitGraph
from sprig.core.persistence import Persistence
from sprig.core.worktree import WorkingTreeSync
from sprig.core.repository import Repository, StatusReport
from sprig.core.config import Config

__all__ = [
    'ErrorKind',
    'SprigError',
    'SprigException',
    'Result',
    'ContentRecord',
    'Commit',
    'ContentHasher',
    'HashlibHasher',
    'ObjectStore',
    'StagingArea',
    'CommitGraph',
    'Persistence',
    'WorkingTreeSync',
    'Repository',
    'StatusReport',
    'Config',
]
