"""Sprig - a minimal version control engine implemented in Python."""

__version__ = '0.1.0'

from sprig.core.repository import Repository
from sprig.core.objects import ContentRecord, Commit

__all__ = [
    'Repository',
    'ContentRecord',
    'Commit',
]
