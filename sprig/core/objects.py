"""Sprig objects: content records and commits."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Any


@dataclass(frozen=True)
class ContentRecord:
    """
    Represents stored file content (a blob).

    The digest is the identity. ``origin_location`` only remembers which
    working-tree path last produced this content and never takes part in
    equality.
    """
    digest: str
    stored_location: str
    origin_location: str = ''

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentRecord):
            return NotImplemented
        return self.digest == other.digest

    def __hash__(self) -> int:
        return hash(self.digest)

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            'digest': self.digest,
            'stored_location': self.stored_location,
            'origin_location': self.origin_location,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> 'ContentRecord':
        """Create from dictionary."""
        return cls(
            digest=data['digest'],
            stored_location=data['stored_location'],
            origin_location=data.get('origin_location', ''),
        )

    def __repr__(self) -> str:
        return f"ContentRecord(digest={self.digest[:7]}, origin={self.origin_location})"


class Commit:
    """
    Represents a commit with metadata.

    A commit captures:
    - Complete snapshot of the tracked files (name -> digest)
    - Parent commit, plus a second parent for merge commits
    - Author and timestamp
    - Commit message

    Everything except ``child_ids`` is read-only after construction.
    ``child_ids`` is a back-reference index maintained by the CommitGraph.
    """

    __slots__ = ('_id', '_timestamp', '_message', '_author', '_parent_id',
                 '_second_parent_id', '_snapshot', 'child_ids')

    def __init__(
        self,
        commit_id: str,
        timestamp: int,
        message: str,
        author: str,
        snapshot: Dict[str, str],
        parent_id: Optional[str] = None,
        second_parent_id: Optional[str] = None,
    ):
        """
        Initialize a commit.

        Args:
            commit_id: Commit identifier
            timestamp: Unix timestamp
            message: Commit message
            author: Author string (e.g. "Name <email>")
            snapshot: File name -> digest mapping; copied
            parent_id: Parent commit id (None for the root commit)
            second_parent_id: Second parent id (merge commits only)
        """
        self._id = commit_id
        self._timestamp = timestamp
        self._message = message
        self._author = author
        self._snapshot = dict(snapshot)
        self._parent_id = parent_id
        self._second_parent_id = second_parent_id
        self.child_ids: List[str] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def timestamp(self) -> int:
        return self._timestamp

    @property
    def message(self) -> str:
        return self._message

    @property
    def author(self) -> str:
        return self._author

    @property
    def parent_id(self) -> Optional[str]:
        return self._parent_id

    @property
    def second_parent_id(self) -> Optional[str]:
        return self._second_parent_id

    @property
    def snapshot(self) -> Dict[str, str]:
        """Copy of the file name -> digest mapping."""
        return dict(self._snapshot)

    @property
    def parents(self) -> List[str]:
        """Parent ids, first parent first."""
        return [p for p in (self._parent_id, self._second_parent_id) if p]

    @property
    def is_root(self) -> bool:
        return self._parent_id is None

    @property
    def is_merge(self) -> bool:
        return self._second_parent_id is not None

    def file_names(self) -> List[str]:
        return sorted(self._snapshot)

    def contains_file(self, name: str) -> bool:
        return name in self._snapshot

    def digest_of(self, name: str) -> Optional[str]:
        return self._snapshot.get(name)

    def digests(self) -> List[str]:
        return list(self._snapshot.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization (child ids excluded)."""
        return {
            'id': self._id,
            'timestamp': self._timestamp,
            'message': self._message,
            'author': self._author,
            'parent_id': self._parent_id,
            'second_parent_id': self._second_parent_id,
            'snapshot': dict(sorted(self._snapshot.items())),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Commit':
        """Create from dictionary."""
        return cls(
            commit_id=data['id'],
            timestamp=data['timestamp'],
            message=data['message'],
            author=data['author'],
            snapshot=data.get('snapshot', {}),
            parent_id=data.get('parent_id'),
            second_parent_id=data.get('second_parent_id'),
        )

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self._message.split('\n')[0][:50]
        return f"Commit(id={self._id[:7]}{parent_info}, msg='{msg_preview}')"
