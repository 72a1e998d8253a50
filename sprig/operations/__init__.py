"""Operations module for high-level Sprig operations.

This module contains the merge algorithm: fast-forward detection,
three-way reconciliation and conflict detection.
"""

from sprig.operations.merge import MergeEngine, MergeResult, MergeConflict, merge_snapshots

__all__ = [
    'MergeEngine', 'MergeResult', 'MergeConflict', 'merge_snapshots',
]
