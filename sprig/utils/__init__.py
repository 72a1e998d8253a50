"""Utilities module for common helper functions.

This module contains:
- Ignore file handling (.sprigignore)
- Working-tree walking
"""

from sprig.utils.ignore import IgnoreMatcher, IgnorePattern, get_ignore_matcher, walk_files

__all__ = [
    'IgnoreMatcher', 'IgnorePattern', 'get_ignore_matcher', 'walk_files',
]
