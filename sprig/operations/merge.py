"""Merge operations for Sprig VCS."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from sprig.core.errors import ErrorKind, Result, no_such_branch
from sprig.core.objects import Commit

logger = logging.getLogger(__name__)

UP_TO_DATE = 'up_to_date'
FAST_FORWARD = 'fast_forward'
MERGED = 'merged'


@dataclass
class MergeConflict:
    """A file changed differently on both sides of a merge."""
    path: str
    base_digest: Optional[str]
    ours_digest: Optional[str]
    theirs_digest: Optional[str]

    def __repr__(self) -> str:
        return f"MergeConflict({self.path})"


@dataclass
class MergeResult:
    """Outcome of a successful merge."""
    status: str
    commit: Optional[Commit] = None
    base_id: Optional[str] = None
    files: Dict[str, str] = field(default_factory=dict)
    message: str = ""

    @property
    def is_fast_forward(self) -> bool:
        return self.status == FAST_FORWARD

    @property
    def is_up_to_date(self) -> bool:
        return self.status == UP_TO_DATE

    def __repr__(self) -> str:
        if self.commit is not None:
            return f"MergeResult({self.status}, commit={self.commit.id})"
        return f"MergeResult({self.status})"


def merge_snapshots(
    base_files: Dict[str, str],
    ours_files: Dict[str, str],
    theirs_files: Dict[str, str],
) -> Tuple[Dict[str, str], Optional[MergeConflict]]:
    """
    Reconcile three file maps.

    Files are visited in sorted order and reconciliation stops at the first
    conflict.

    Args:
        base_files: Files in the common ancestor
        ours_files: Files on the current branch
        theirs_files: Files on the branch being merged in

    Returns:
        Tuple of (merged_files, conflict); merged_files is empty on conflict
    """
    merged_files = {}
    all_paths = set(base_files) | set(ours_files) | set(theirs_files)

    for path in sorted(all_paths):
        base_hash = base_files.get(path)
        ours_hash = ours_files.get(path)
        theirs_hash = theirs_files.get(path)

        if base_hash is not None:
            if ours_hash is not None and theirs_hash is not None:
                if theirs_hash == base_hash:
                    # Unchanged upstream: ours wins, whether changed or not
                    merged_files[path] = ours_hash
                elif ours_hash == base_hash or ours_hash == theirs_hash:
                    merged_files[path] = theirs_hash
                else:
                    return {}, MergeConflict(path, base_hash, ours_hash, theirs_hash)
            elif ours_hash is not None:
                merged_files[path] = ours_hash
            elif theirs_hash is not None:
                merged_files[path] = theirs_hash
            # Gone on both sides: dropped
            continue

        # Added since the ancestor
        if ours_hash is not None and theirs_hash is not None and ours_hash != theirs_hash:
            return {}, MergeConflict(path, None, ours_hash, theirs_hash)
        merged_files[path] = ours_hash if ours_hash is not None else theirs_hash

    return merged_files, None


class MergeEngine:
    """
    Handles merge operations for a CommitGraph.

    Supports:
    - Up-to-date detection
    - Reverse merge rejection (target is an ancestor of current)
    - Fast-forward merges
    - Three-way merges with conflict detection

    Every step that can fail runs before the graph is touched, so a failed
    merge leaves commits and branch pointers exactly as they were.
    """

    def __init__(self, graph):
        """
        Initialize merge engine.

        Args:
            graph: CommitGraph instance
        """
        self.graph = graph

    def can_fast_forward(self, current_id: str, target_id: str) -> bool:
        """True when current is an ancestor of target."""
        return self.graph.is_ancestor(current_id, target_id)

    def three_way_merge(self, base: Commit, ours: Commit, theirs: Commit) -> Result:
        """
        Compute merged files for three commits without changing anything.

        Returns:
            Result carrying the merged file map, or MergeConflict
        """
        merged_files, conflict = merge_snapshots(base.snapshot, ours.snapshot, theirs.snapshot)
        if conflict is not None:
            logger.debug("Conflict in %s (base=%s ours=%s theirs=%s)", conflict.path,
                         conflict.base_digest, conflict.ours_digest, conflict.theirs_digest)
            return Result.fail(ErrorKind.MERGE_CONFLICT,
                               f"Merge conflict in {conflict.path}", path=conflict.path)
        return Result.ok(merged_files)

    def merge_branch(
        self,
        timestamp: int,
        author: str,
        other_branch: str,
        merge_commit_id: Optional[str] = None,
        message: Optional[str] = None,
    ) -> Result:
        """
        Merge a branch into the current branch.

        Args:
            timestamp: Unix timestamp for a merge commit
            author: Author of a merge commit
            other_branch: Name of the branch to merge
            merge_commit_id: Explicit id for a merge commit; derived when omitted
            message: Merge commit message

        Returns:
            Result carrying a MergeResult, or NoSuchBranch, ReverseMerge,
            MergeConflict
        """
        graph = self.graph
        if other_branch not in graph.branches:
            return no_such_branch(other_branch)
        if graph.head is None:
            return no_such_branch(other_branch)

        current = graph.head_commit()
        other = graph.commits[graph.branches[other_branch]]

        if current == other:
            return Result.ok(MergeResult(UP_TO_DATE, base_id=current.id, message="Already up to date"))

        lca_result = graph.find_common_ancestor_of_branches(graph.head, other_branch)
        if not lca_result.success:
            return lca_result
        lca = lca_result.value

        if lca == other:
            return Result.fail(
                ErrorKind.REVERSE_MERGE,
                f"Branch '{other_branch}' is an ancestor of '{graph.head}'; nothing to merge",
            )

        if self.can_fast_forward(current.id, other.id):
            graph.move_branch(graph.head, other.id)
            logger.debug("Fast-forward %s to %s", graph.head, other.id)
            return Result.ok(MergeResult(
                FAST_FORWARD,
                commit=other,
                base_id=lca.id,
                files=other.snapshot,
                message=f"Fast-forward to {other.id}",
            ))

        merged = self.three_way_merge(lca, current, other)
        if not merged.success:
            return merged
        merged_files = merged.value

        if message is None:
            message = f"merged by {graph.head} and {other_branch}"
        if merge_commit_id is None:
            merge_commit_id = graph.make_commit_id(
                timestamp, message, author, merged_files, [current.id, other.id])
        elif merge_commit_id in graph.commits:
            raise ValueError(f"Commit {merge_commit_id} already exists")

        commit = Commit(
            merge_commit_id, timestamp, message, author, merged_files,
            parent_id=current.id, second_parent_id=other.id,
        )
        graph.register_commit(commit)
        graph.move_branch(graph.head, commit.id)
        graph.move_branch(other_branch, commit.id)
        logger.debug("Merged %s into %s as %s (base %s)", other_branch, graph.head, commit.id, lca.id)

        return Result.ok(MergeResult(
            MERGED,
            commit=commit,
            base_id=lca.id,
            files=merged_files,
            message=f"Merged {other.id} into {current.id}",
        ))
