"""Commit graph for Sprig VCS."""

import logging
from collections import deque
from typing import Dict, Iterator, List, Optional, Set

from .errors import ErrorKind, Result, no_such_branch, no_such_commit
from .hash import DEFAULT_COMMIT_ID_LENGTH, ContentHasher, HashlibHasher, truncate_id
from .objects import Commit

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = 'master'


class CommitGraph:
    """
    Owns every commit, the branch table and the head pointer.

    Handles:
    - Appending commits to the current branch
    - Branch creation, deletion and switching
    - Moving the current branch to an arbitrary commit (reset)
    - Ancestor queries (lowest common ancestor over the full DAG)
    - Merging, through :class:`sprig.operations.merge.MergeEngine`

    Commits are only ever added. Branch pointers and ``head`` are the only
    mutable state, and every failing operation leaves them untouched.
    """

    def __init__(
        self,
        hasher: Optional[ContentHasher] = None,
        id_length: int = DEFAULT_COMMIT_ID_LENGTH,
    ):
        """
        Initialize an empty graph.

        Args:
            hasher: ContentHasher used to derive commit ids
            id_length: Width commit ids are truncated to (0 keeps full digests)
        """
        self.hasher = hasher or HashlibHasher()
        self.id_length = id_length
        self.commits: Dict[str, Commit] = {}
        self.branches: Dict[str, str] = {}
        self.head: Optional[str] = None
        self.root_id: Optional[str] = None
        self._depths: Dict[str, int] = {}
        self._merge_engine = None

    @property
    def merge(self):
        """Get MergeEngine instance."""
        if self._merge_engine is None:
            from sprig.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    @property
    def is_empty(self) -> bool:
        return not self.commits

    # Commit creation

    def make_commit_id(
        self,
        timestamp: int,
        message: str,
        author: str,
        snapshot: Dict[str, str],
        parents: List[str],
    ) -> str:
        """
        Derive a commit id from commit metadata.

        The digest is truncated to ``id_length``. If the truncated id is
        already taken the metadata is re-hashed with an increasing salt.
        """
        lines = [f'time {timestamp}', f'author {author}']
        lines.extend(f'parent {p}' for p in parents)
        lines.extend(f'file {name} {digest}' for name, digest in sorted(snapshot.items()))
        lines.append('')
        lines.append(message)
        payload = '\n'.join(lines).encode()

        salt = 0
        commit_id = truncate_id(self.hasher.hash(payload), self.id_length)
        while commit_id in self.commits:
            salt += 1
            logger.warning("Commit id %s already taken, rehashing (salt %d)", commit_id, salt)
            commit_id = truncate_id(
                self.hasher.hash(payload + f'\nsalt {salt}'.encode()), self.id_length)
        return commit_id

    def commit(
        self,
        timestamp: int,
        message: str,
        author: str,
        snapshot: Dict[str, str],
        commit_id: Optional[str] = None,
    ) -> Commit:
        """
        Record a new commit on the current branch.

        The first commit becomes the root, creates branch 'master' and points
        head at it. Later commits take the head branch's commit as parent and
        advance that branch.

        Args:
            timestamp: Unix timestamp
            message: Commit message
            author: Author string
            snapshot: Complete file name -> digest mapping
            commit_id: Explicit id; derived from the metadata when omitted

        Returns:
            Commit: The new commit
        """
        if self.is_empty:
            parent_id = None
            self.head = DEFAULT_BRANCH
        else:
            parent_id = self.branches[self.head]

        parents = [parent_id] if parent_id else []
        if commit_id is None:
            commit_id = self.make_commit_id(timestamp, message, author, snapshot, parents)

        commit = Commit(commit_id, timestamp, message, author, snapshot, parent_id=parent_id)
        self.register_commit(commit)
        self.branches[self.head] = commit.id
        logger.debug("Committed %s on %s", commit.id, self.head)
        return commit

    def register_commit(self, commit: Commit) -> None:
        """
        Add a commit and index it as a child of its parents.

        Raises:
            ValueError: If the id is taken or a parent is unknown
        """
        if commit.id in self.commits:
            raise ValueError(f"Commit {commit.id} already exists")
        for parent in commit.parents:
            if parent not in self.commits:
                raise ValueError(f"Parent {parent} of {commit.id} does not exist")

        self.commits[commit.id] = commit
        for parent in commit.parents:
            self.commits[parent].child_ids.append(commit.id)
        if commit.is_root and self.root_id is None:
            self.root_id = commit.id

    def rebuild_children(self) -> None:
        """Recompute every commit's child_ids from parent pointers."""
        for commit in self.commits.values():
            commit.child_ids = []
        for commit in self.commits.values():
            for parent in commit.parents:
                if parent in self.commits:
                    self.commits[parent].child_ids.append(commit.id)

    # Lookup

    def get_commit(self, commit_id: str) -> Result:
        """Result carrying the commit with this id, or NoSuchCommit."""
        commit = self.commits.get(commit_id)
        if commit is None:
            return no_such_commit(commit_id)
        return Result.ok(commit)

    def commit_for_branch(self, name: str) -> Result:
        """Result carrying the commit a branch points at, or NoSuchBranch."""
        if name not in self.branches:
            return no_such_branch(name)
        return Result.ok(self.commits[self.branches[name]])

    def head_commit(self) -> Optional[Commit]:
        """
        Get the commit the current branch points at.

        Returns:
            Commit, or None while the graph is empty
        """
        if self.head is None:
            return None
        return self.commits[self.branches[self.head]]

    def is_head(self, commit: Commit) -> bool:
        return commit == self.head_commit()

    def __iter__(self) -> Iterator[Commit]:
        """Walk first parents from head back to the root."""
        current = self.head_commit()
        while current is not None:
            yield current
            current = self.commits.get(current.parent_id) if current.parent_id else None

    def all_commits(self) -> List[Commit]:
        """Every commit, oldest first."""
        return sorted(self.commits.values(), key=lambda c: (self.depth(c.id), c.timestamp, c.id))

    def find_by_message(self, message: str) -> List[Commit]:
        return [c for c in self.all_commits() if c.message == message]

    def resolve_id(self, prefix: str) -> Optional[str]:
        """
        Resolve a full or abbreviated commit id.

        Longer ids are truncated to ``id_length`` first, so a full digest
        still finds its short commit id.

        Returns:
            Commit id, or None if nothing (or more than one commit) matches
        """
        if prefix in self.commits:
            return prefix
        candidate = truncate_id(prefix, self.id_length)
        if candidate in self.commits:
            return candidate
        matches = [cid for cid in self.commits if cid.startswith(prefix)]
        if len(matches) == 1:
            return matches[0]
        return None

    # Branches

    def list_branches(self) -> List[tuple]:
        """List of (branch_name, commit_id) tuples sorted by name."""
        return sorted(self.branches.items())

    def add_branch(self, name: str) -> Result:
        """
        Create a branch at the current head commit.

        Returns:
            Result carrying the commit id, or AlreadyExistsBranch
        """
        if name in self.branches:
            return Result.fail(ErrorKind.ALREADY_EXISTS_BRANCH,
                               f"A branch named '{name}' already exists")
        if self.head is None:
            return no_such_branch(DEFAULT_BRANCH)

        self.branches[name] = self.branches[self.head]
        logger.debug("Created branch %s at %s", name, self.branches[name])
        return Result.ok(self.branches[name])

    def delete_branch(self, name: str) -> Result:
        """
        Delete a branch. Commits are left alone even if they become unreachable.

        Returns:
            Result carrying the commit id the branch pointed at
        """
        if name not in self.branches:
            return no_such_branch(name)
        if name == self.head:
            return Result.fail(ErrorKind.DELETE_CURRENT_BRANCH,
                               f"Cannot delete the current branch '{name}'")

        commit_id = self.branches.pop(name)
        logger.debug("Deleted branch %s (was %s)", name, commit_id)
        return Result.ok(commit_id)

    def switch_branch_to(self, name: str) -> Result:
        """Point head at another branch. Does not touch the working tree."""
        if name not in self.branches:
            return no_such_branch(name)
        self.head = name
        return Result.ok(self.head_commit())

    def reset_current_branch_to(self, commit_id: str) -> Result:
        """Move the current branch to any existing commit, regardless of ancestry."""
        if commit_id not in self.commits:
            return no_such_commit(commit_id)
        if self.head is None:
            return no_such_branch(DEFAULT_BRANCH)

        previous = self.branches[self.head]
        self.branches[self.head] = commit_id
        logger.debug("Reset %s: %s -> %s", self.head, previous, commit_id)
        return Result.ok(self.commits[commit_id])

    def move_branch(self, name: str, commit_id: str) -> None:
        """
        Point an existing branch at an existing commit.

        Raises:
            KeyError: If the branch or commit is unknown
        """
        if name not in self.branches:
            raise KeyError(name)
        if commit_id not in self.commits:
            raise KeyError(commit_id)
        self.branches[name] = commit_id

    # Ancestry

    def ancestors(self, commit_id: str) -> Set[str]:
        """
        All ancestors of a commit, following both parents of merge commits.

        Returns:
            Set of commit ids, including commit_id itself
        """
        seen = {commit_id}
        queue = deque([commit_id])

        while queue:
            current = self.commits[queue.popleft()]
            for parent in current.parents:
                if parent not in seen:
                    seen.add(parent)
                    queue.append(parent)

        return seen

    def depth(self, commit_id: str) -> int:
        """
        Length of the longest parent path from a commit down to the root.

        Commits never change, so depths are cached for the graph's lifetime.
        """
        if commit_id in self._depths:
            return self._depths[commit_id]

        stack = [commit_id]
        while stack:
            current = stack[-1]
            parents = self.commits[current].parents
            pending = [p for p in parents if p not in self._depths]
            if pending:
                stack.extend(pending)
                continue
            stack.pop()
            self._depths[current] = max((self._depths[p] + 1 for p in parents), default=0)

        return self._depths[commit_id]

    def is_ancestor(self, ancestor_id: str, commit_id: str) -> bool:
        return ancestor_id in self.ancestors(commit_id)

    def find_common_ancestor(self, commit_id_a: str, commit_id_b: str) -> Result:
        """
        Find the lowest common ancestor of two commits.

        Both ancestor sets are collected over every parent edge and
        intersected. The deepest shared commit wins; equal depths fall back
        to the smallest id so the answer is stable.

        Returns:
            Result carrying the ancestor Commit, or NoSuchCommit
        """
        for commit_id in (commit_id_a, commit_id_b):
            if commit_id not in self.commits:
                return no_such_commit(commit_id)

        if commit_id_a == commit_id_b:
            return Result.ok(self.commits[commit_id_a])

        common = self.ancestors(commit_id_a) & self.ancestors(commit_id_b)
        if not common:
            return Result.fail(ErrorKind.NO_SUCH_COMMIT,
                               f"No common ancestor of {commit_id_a} and {commit_id_b}")

        best = min(common, key=lambda cid: (-self.depth(cid), cid))
        return Result.ok(self.commits[best])

    def find_common_ancestor_of_branches(self, branch_a: str, branch_b: str) -> Result:
        """LCA of the commits two branches point at."""
        for name in (branch_a, branch_b):
            if name not in self.branches:
                return no_such_branch(name)
        return self.find_common_ancestor(self.branches[branch_a], self.branches[branch_b])

    def merge_branch(
        self,
        timestamp: int,
        author: str,
        other_branch: str,
        merge_commit_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> Result:
        """Merge other_branch into the current branch. See MergeEngine.merge_branch."""
        return self.merge.merge_branch(
            timestamp, author, other_branch,
            merge_commit_id=merge_commit_id, message=message,
        )

    # Serialization

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'head': self.head,
            'id_length': self.id_length,
            'branches': dict(sorted(self.branches.items())),
            'commits': [c.to_dict() for c in self.all_commits()],
        }

    @classmethod
    def from_dict(cls, data: dict, hasher: Optional[ContentHasher] = None) -> 'CommitGraph':
        """
        Create from dictionary.

        child_ids are not stored; they are rebuilt from parent pointers.

        Raises:
            ValueError: If a commit names a parent that is not in the data
        """
        graph = cls(hasher=hasher, id_length=data.get('id_length', DEFAULT_COMMIT_ID_LENGTH))
        for entry in data.get('commits', []):
            commit = Commit.from_dict(entry)
            graph.commits[commit.id] = commit
            if commit.is_root and graph.root_id is None:
                graph.root_id = commit.id

        for commit in graph.commits.values():
            for parent in commit.parents:
                if parent not in graph.commits:
                    raise ValueError(f"Parent {parent} of {commit.id} does not exist")
        graph.rebuild_children()
        graph.branches = dict(data.get('branches', {}))
        graph.head = data.get('head')
        return graph

    def __repr__(self) -> str:
        return f"CommitGraph(commits={len(self.commits)}, branches={len(self.branches)}, head={self.head})"
