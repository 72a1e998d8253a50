"""Repository management for Sprig VCS."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .config import Config
from .errors import ErrorKind, Result, content_not_found, no_such_commit
from .graph import CommitGraph
from .hash import HashlibHasher
from .index import StagingArea
from .object_store import ObjectStore
from .objects import Commit
from .persistence import Persistence
from .worktree import WorkingTreeSync

logger = logging.getLogger(__name__)

SPRIG_DIR = '.sprig'
INITIAL_MESSAGE = 'initial commit'


@dataclass
class StatusReport:
    """Working tree state relative to the staging area and head commit."""
    branch: Optional[str]
    tracked: List[str] = field(default_factory=list)
    staged: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.modified or self.removed or self.untracked)


class Repository:
    """
    Represents a Sprig repository.

    The repository is the context every operation runs in: it owns the
    ObjectStore, StagingArea and CommitGraph loaded from ``.sprig/`` and
    writes them back with :meth:`save`.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.sprig_dir = self.work_tree / SPRIG_DIR
        self.objects_dir = self.sprig_dir / 'objects'
        self.config_file = self.sprig_dir / 'config'
        self.persistence = Persistence(self.sprig_dir)
        self.worktree = WorkingTreeSync(self.work_tree)

        self.store: Optional[ObjectStore] = None
        self.staging: Optional[StagingArea] = None
        self.graph: Optional[CommitGraph] = None
        self._config = None

    @property
    def config(self) -> Config:
        """Get Config instance."""
        if self._config is None:
            self._config = Config(self.config_file)
        return self._config

    def exists(self) -> bool:
        return self.sprig_dir.is_dir()

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / SPRIG_DIR).is_dir():
                return cls(str(current))
            if current == current.parent:
                return None
            current = current.parent

    def init(self, author: Optional[str] = None, timestamp: Optional[int] = None) -> Result:
        """
        Initialize a new repository.

        Creates the .sprig directory structure and the initial empty commit
        on 'master':
        .sprig/
        ├── objects/       # Stored content
        ├── blobs.json     # Object registry
        ├── index.json     # Staging area
        ├── graph.json     # Commits and branches
        └── config         # Repository configuration

        Returns:
            Result carrying the initial commit, or AlreadyInitialized
        """
        if self.exists():
            return Result.fail(ErrorKind.ALREADY_INITIALIZED,
                               f"Repository already exists at {self.sprig_dir}")

        self.sprig_dir.mkdir()
        self.objects_dir.mkdir()
        self.config_file.write_text('[core]\n\trepositoryformatversion = 0\n')

        self.load()
        commit = self.graph.commit(
            timestamp if timestamp is not None else int(time.time()),
            INITIAL_MESSAGE,
            author or self.config.get_author(),
            {},
        )
        self.save()
        return Result.ok(commit)

    def load(self) -> 'Repository':
        """
        Load engine state from disk.

        Returns:
            Repository: self for method chaining
        """
        hasher = HashlibHasher(self.config.hash_algorithm)
        id_length = self.config.commit_id_length
        self.store, self.staging, self.graph = self.persistence.load_all(hasher, id_length)
        self.graph.id_length = id_length
        return self

    def save(self) -> None:
        """Persist engine state."""
        self.persistence.save_all(self.store, self.staging, self.graph)

    def _ensure_loaded(self) -> None:
        if self.graph is None:
            self.load()

    @property
    def current_branch(self) -> Optional[str]:
        self._ensure_loaded()
        return self.graph.head

    def head_commit(self) -> Optional[Commit]:
        self._ensure_loaded()
        return self.graph.head_commit()

    def relative_name(self, path: Path) -> str:
        """Repository-relative, '/' separated name for a path."""
        return Path(path).resolve().relative_to(self.work_tree).as_posix()

    def _locate(self, raw: str, cwd: Optional[Path]) -> Optional[Path]:
        """
        Absolute path for a command-line path, or None outside the work tree.

        Relative paths are taken from cwd when given, else from the work tree.
        """
        path = Path(raw)
        if not path.is_absolute():
            path = Path(cwd or self.work_tree) / path
        path = path.resolve()
        if path != self.work_tree and self.work_tree not in path.parents:
            return None
        return path

    def _outside(self, raw: str) -> Result:
        return Result.fail(ErrorKind.FILE_MISSING,
                           f"'{raw}' is outside the repository at {self.work_tree}", path=str(raw))

    # Staging

    def add(self, paths: Iterable[str], cwd: Optional[Path] = None) -> Result:
        """
        Stage files and directories.

        Directories are walked; dot-files and .sprigignore matches are skipped.

        Args:
            paths: File or directory paths
            cwd: Directory relative paths start from (the work tree by default)

        Returns:
            Result carrying the list of staged names, or FileMissing
        """
        from sprig.utils.ignore import get_ignore_matcher, walk_files

        self._ensure_loaded()
        matcher = get_ignore_matcher(self.work_tree)

        names = []
        for raw in paths:
            path = self._locate(raw, cwd)
            if path is None:
                return self._outside(raw)
            if not path.exists():
                return Result.fail(ErrorKind.FILE_MISSING, f"No file named '{raw}'", path=str(raw))
            names.extend(walk_files(self.work_tree, path, matcher))

        # Read everything before touching the store or the staging area
        contents = [((self.work_tree / name).read_bytes(), name) for name in names]
        digests = self.store.ingest(contents)
        self.staging.track(zip(names, digests))
        return Result.ok(names)

    def referenced_digests(self) -> set:
        """Digests named by any commit snapshot or the staging area."""
        digests = set(self.staging.digests())
        for commit in self.graph.commits.values():
            digests.update(commit.digests())
        return digests

    def rm(self, name: str, cwd: Optional[Path] = None) -> Result:
        """
        Unstage a file.

        The staged content is also deleted from the object store unless a
        commit or another staged file still refers to it.

        Args:
            name: Path of the staged file
            cwd: Directory a relative name starts from (the work tree by default)

        Returns:
            Result carrying the unstaged digest, or NotStaged, FileMissing
        """
        self._ensure_loaded()
        path = self._locate(name, cwd)
        if path is None:
            return self._outside(name)

        untracked = self.staging.untrack(self.relative_name(path))
        if not untracked.success:
            return untracked

        digest = untracked.value
        if digest in self.store and digest not in self.referenced_digests():
            self.store.remove(digest)
        return untracked

    # Commits

    def commit(self, message: str, author: Optional[str] = None,
               timestamp: Optional[int] = None) -> Result:
        """
        Commit the staged changes on top of the head commit.

        The new snapshot is the head snapshot updated with every staged entry.

        Returns:
            Result carrying the new Commit, or NothingToCommit, ContentNotFound
        """
        self._ensure_loaded()
        head = self.graph.head_commit()
        base = head.snapshot if head else {}

        snapshot = dict(base)
        snapshot.update(self.staging.snapshot())
        if not self.staging.count() or (head is not None and snapshot == base):
            return Result.fail(ErrorKind.NOTHING_TO_COMMIT, "No changes added to the commit")

        for name, digest in self.staging.snapshot().items():
            if digest not in self.store:
                return Result.fail(ErrorKind.CONTENT_NOT_FOUND,
                                   f"Staged content for '{name}' is missing", path=name)

        commit = self.graph.commit(
            timestamp if timestamp is not None else int(time.time()),
            message,
            author or self.config.get_author(),
            snapshot,
        )
        self.staging.clear()
        return Result.ok(commit)

    def _check_objects(self, commit: Commit) -> Result:
        for digest in commit.digests():
            if not self.store.is_available(digest):
                return content_not_found(digest)
        return Result.ok(commit)

    def _sync_head(self) -> Result:
        synced = self.worktree.sync(self.graph.head_commit().snapshot, self.store)
        if synced.success:
            self.staging.clear()
        return synced

    def checkout(self, branch: str) -> Result:
        """
        Switch branches and restore the branch's files.

        Returns:
            Result carrying the number of files written, or NoSuchBranch
        """
        self._ensure_loaded()
        target = self.graph.commit_for_branch(branch)
        if not target.success:
            return target

        checked = self._check_objects(target.value)
        if not checked.success:
            return checked

        self.graph.switch_branch_to(branch)
        return self._sync_head()

    def reset(self, commit_ref: str) -> Result:
        """
        Move the current branch to a commit and restore its files.

        Args:
            commit_ref: Full, truncated or abbreviated commit id

        Returns:
            Result carrying the Commit, or NoSuchCommit
        """
        self._ensure_loaded()
        commit_id = self.graph.resolve_id(commit_ref)
        if commit_id is None:
            return no_such_commit(commit_ref)

        checked = self._check_objects(self.graph.commits[commit_id])
        if not checked.success:
            return checked

        reset = self.graph.reset_current_branch_to(commit_id)
        if not reset.success:
            return reset

        synced = self._sync_head()
        if not synced.success:
            return synced
        return reset

    def merge(self, branch: str, author: Optional[str] = None,
              timestamp: Optional[int] = None) -> Result:
        """
        Merge a branch into the current branch and restore the merged files.

        Returns:
            Result carrying a MergeResult, or MergeWithSelf, NoSuchBranch,
            ReverseMerge, MergeConflict, ContentNotFound
        """
        self._ensure_loaded()
        if branch == self.graph.head:
            return Result.fail(ErrorKind.MERGE_WITH_SELF, "Cannot merge a branch with itself")

        other = self.graph.commit_for_branch(branch)
        if not other.success:
            return other
        current = self.graph.head_commit()
        # Every merged digest comes from one side, so both must be readable
        # before the graph is touched
        if other.value != current:
            for commit in (current, other.value):
                checked = self._check_objects(commit)
                if not checked.success:
                    return checked

        merged = self.graph.merge_branch(
            timestamp if timestamp is not None else int(time.time()),
            author or self.config.get_author(),
            branch,
        )
        if not merged.success or merged.value.is_up_to_date:
            return merged

        synced = self._sync_head()
        if not synced.success:
            return synced
        return merged

    # History

    def log(self) -> List[Commit]:
        """First-parent history from head back to the root."""
        self._ensure_loaded()
        return list(self.graph)

    def global_log(self) -> List[Commit]:
        """Every commit, oldest first."""
        self._ensure_loaded()
        return self.graph.all_commits()

    def find(self, message: str) -> List[Commit]:
        """Commits whose message matches exactly."""
        self._ensure_loaded()
        return self.graph.find_by_message(message)

    def status(self) -> StatusReport:
        """
        Compare the working tree with the staging area and head commit.

        A tracked file is modified when its content differs from the staged
        version, or from the committed version when it is not staged.
        """
        from sprig.utils.ignore import get_ignore_matcher, walk_files

        self._ensure_loaded()
        head = self.graph.head_commit()
        expected = head.snapshot if head else {}
        expected.update(self.staging.snapshot())

        report = StatusReport(branch=self.graph.head)
        report.tracked = sorted(expected)
        report.staged = sorted(self.staging.entries)

        for name in report.tracked:
            path = self.work_tree / name
            if not path.exists():
                report.removed.append(name)
            elif self.store.hasher.hash(path.read_bytes()) != expected[name]:
                report.modified.append(name)

        matcher = get_ignore_matcher(self.work_tree)
        report.untracked = [
            name for name in walk_files(self.work_tree, self.work_tree, matcher)
            if name not in expected
        ]
        return report

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
