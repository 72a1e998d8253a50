"""Error kinds and tagged results for Sprig.

Fallible engine operations never raise for expected failures. They return a
:class:`Result` that either carries a value or a :class:`SprigError`; callers
branch on ``result.success``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar('T')


class ErrorKind(Enum):
    """Every failure an engine operation can report."""
    NO_SUCH_BRANCH = 'NoSuchBranch'
    NO_SUCH_COMMIT = 'NoSuchCommit'
    ALREADY_EXISTS_BRANCH = 'AlreadyExistsBranch'
    DELETE_CURRENT_BRANCH = 'DeleteCurrentBranch'
    NOT_STAGED = 'NotStaged'
    MERGE_CONFLICT = 'MergeConflict'
    REVERSE_MERGE = 'ReverseMerge'
    CONTENT_NOT_FOUND = 'ContentNotFound'
    # Repository level
    NOTHING_TO_COMMIT = 'NothingToCommit'
    MERGE_WITH_SELF = 'MergeWithSelf'
    NOT_A_REPOSITORY = 'NotARepository'
    ALREADY_INITIALIZED = 'AlreadyInitialized'
    FILE_MISSING = 'FileMissing'


@dataclass(frozen=True)
class SprigError:
    """A typed failure with a human readable message."""
    kind: ErrorKind
    message: str
    path: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class SprigException(Exception):
    """Raised by :meth:`Result.unwrap` when the result is a failure."""

    def __init__(self, error: SprigError):
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass
class Result(Generic[T]):
    """Outcome of a fallible operation."""
    success: bool
    value: Optional[T] = None
    error: Optional[SprigError] = None

    @classmethod
    def ok(cls, value: Any = None) -> 'Result':
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str, path: Optional[str] = None) -> 'Result':
        return cls(success=False, error=SprigError(kind, message, path))

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Error kind, or None on success."""
        return self.error.kind if self.error else None

    def unwrap(self) -> T:
        """
        Return the value or raise.

        Raises:
            SprigException: If the result is a failure
        """
        if not self.success:
            raise SprigException(self.error)
        return self.value

    def __repr__(self) -> str:
        if self.success:
            return f"Result(ok, {self.value!r})"
        return f"Result(failed, {self.error.kind.value}: {self.error.message})"


def no_such_branch(name: str) -> Result:
    return Result.fail(ErrorKind.NO_SUCH_BRANCH, f"No branch named '{name}'")


def no_such_commit(commit_id: str) -> Result:
    return Result.fail(ErrorKind.NO_SUCH_COMMIT, f"No commit with id '{commit_id}'")


def content_not_found(digest: str) -> Result:
    return Result.fail(ErrorKind.CONTENT_NOT_FOUND, f"Object {digest} not found")
