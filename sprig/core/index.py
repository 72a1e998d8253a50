"""Staging area implementation."""

import logging
from typing import Dict, Iterable, Optional, Tuple

from .errors import ErrorKind, Result

logger = logging.getLogger(__name__)


class StagingArea:
    """
    Sprig staging area (the index).

    Maps working-tree relative file names to the digest of the version that
    should go into the next commit. It is a pending, mutable index and is
    cleared whenever the working tree is resynchronized to a commit.
    """

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        """
        Initialize staging area.

        Args:
            entries: Optional initial name -> digest mapping
        """
        self.entries: Dict[str, str] = dict(entries or {})

    def track(self, files: Iterable[Tuple[str, str]]) -> None:
        """
        Stage files, replacing any digest already staged under the same name.

        Args:
            files: (name, digest) pairs
        """
        for name, digest in files:
            previous = self.entries.get(name)
            self.entries[name] = digest
            if previous and previous != digest:
                logger.debug("Restaged %s: %s -> %s", name, previous[:8], digest[:8])
            else:
                logger.debug("Staged %s as %s", name, digest[:8])

    def untrack(self, name: str) -> Result:
        """
        Remove a file from the staging area.

        Args:
            name: Staged file name

        Returns:
            Result carrying the digest that was staged, or NotStaged
        """
        if name not in self.entries:
            return Result.fail(ErrorKind.NOT_STAGED, f"'{name}' is not staged", path=name)
        return Result.ok(self.entries.pop(name))

    def get(self, name: str) -> Optional[str]:
        """Staged digest for a name, if any."""
        return self.entries.get(name)

    def snapshot(self) -> Dict[str, str]:
        """Copy of the staged mapping, safe to hand to a new commit."""
        return dict(self.entries)

    def digests(self) -> list:
        return list(self.entries.values())

    def count(self) -> int:
        return len(self.entries)

    def clear(self) -> None:
        """Clear all entries."""
        self.entries.clear()

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return dict(sorted(self.entries.items()))

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> 'StagingArea':
        """Create from dictionary."""
        return cls(data)

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"StagingArea(entries={len(self.entries)})"
