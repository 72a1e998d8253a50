"""Ignore pattern matching and working-tree walking for Sprig."""

import fnmatch
import os
from pathlib import Path
from typing import Iterator, List, Optional

IGNORE_FILE = '.sprigignore'


class IgnorePattern:
    """A single .sprigignore pattern."""

    def __init__(self, pattern: str, negation: bool = False, directory_only: bool = False):
        """
        Args:
            pattern: Glob pattern; a leading '/' anchors it to the repository root
            negation: If True, matching paths are un-ignored
            directory_only: If True, only paths inside a matching directory match
        """
        self.source = pattern
        self.anchored = pattern.startswith('/')
        self.pattern = pattern.lstrip('/')
        while self.pattern.startswith('**/'):
            self.pattern = self.pattern[3:]
        self.negation = negation
        self.directory_only = directory_only

    @classmethod
    def parse(cls, line: str) -> Optional['IgnorePattern']:
        """Build a pattern from one ignore-file line; None for blanks and comments."""
        text = line.strip()
        if not text or text.startswith('#'):
            return None
        negation = text.startswith('!')
        text = text[1:] if negation else text
        directory_only = text.endswith('/')
        return cls(text.rstrip('/'), negation, directory_only)

    def _match_one(self, candidate: str) -> bool:
        if self.anchored or '/' in self.pattern:
            return fnmatch.fnmatchcase(candidate, self.pattern)
        return fnmatch.fnmatchcase(candidate.rsplit('/', 1)[-1], self.pattern)

    def matches(self, path: str, is_dir: bool = False) -> bool:
        """
        True if path, or any directory above it, matches.

        Args:
            path: Path relative to the repository root, '/' separated
            is_dir: Whether path itself is a directory
        """
        parts = Path(path.replace('\\', '/')).as_posix().split('/')
        prefixes = ['/'.join(parts[:n]) for n in range(1, len(parts) + 1)]
        if self.directory_only and not is_dir:
            prefixes.pop()
        return any(self._match_one(prefix) for prefix in prefixes)

    def __repr__(self) -> str:
        return f"IgnorePattern({self.source!r})"


class IgnoreMatcher:
    """An ordered list of patterns; the last one that matches decides."""

    def __init__(self):
        self.patterns: List[IgnorePattern] = []

    def add_pattern(self, line: str) -> None:
        pattern = IgnorePattern.parse(line)
        if pattern is not None:
            self.patterns.append(pattern)

    def load_file(self, path: Path) -> bool:
        """
        Add every pattern from an ignore file.

        Returns:
            True if the file existed
        """
        if not path.exists():
            return False
        for line in path.read_text().splitlines():
            self.add_pattern(line)
        return True

    def is_ignored(self, path: str, is_dir: bool = False) -> bool:
        for pattern in reversed(self.patterns):
            if pattern.matches(path, is_dir):
                return not pattern.negation
        return False


def get_ignore_matcher(repo_root: Path) -> IgnoreMatcher:
    """Matcher loaded from the .sprigignore file at the repository root, if any."""
    matcher = IgnoreMatcher()
    matcher.load_file(Path(repo_root) / IGNORE_FILE)
    return matcher


def walk_files(repo_root: Path, start: Path, matcher: IgnoreMatcher) -> Iterator[str]:
    """
    Yield working-tree files under start as repository-relative names.

    Dot-files and dot-directories (including .sprig) are always skipped.

    Args:
        repo_root: Repository root
        start: File or directory to walk
        matcher: IgnoreMatcher to filter with
    """
    repo_root = Path(repo_root).resolve()
    start = Path(start).resolve()

    # Nothing under a dot-directory (such as .sprig itself) is ever yielded
    if any(part.startswith('.') for part in start.relative_to(repo_root).parts):
        return

    if start.is_file():
        rel = start.relative_to(repo_root).as_posix()
        if not matcher.is_ignored(rel):
            yield rel
        return

    for dirpath, dirnames, filenames in os.walk(start):
        rel_dir = Path(dirpath).relative_to(repo_root).as_posix()
        rel_dir = '' if rel_dir == '.' else rel_dir + '/'

        dirnames[:] = sorted(
            d for d in dirnames
            if not d.startswith('.') and not matcher.is_ignored(rel_dir + d, is_dir=True)
        )
        for name in sorted(filenames):
            if name.startswith('.'):
                continue
            rel = rel_dir + name
            if not matcher.is_ignored(rel):
                yield rel
