"""Tests for ignore pattern matching and tree walking."""

import pytest
from pathlib import Path

from sprig.utils.ignore import IgnorePattern, IgnoreMatcher, get_ignore_matcher, walk_files


class TestIgnorePattern:
    """Tests for individual ignore patterns."""

    def test_simple_pattern(self):
        pattern = IgnorePattern("*.log")
        assert pattern.matches("test.log")
        assert pattern.matches("dir/test.log")
        assert not pattern.matches("test.txt")
        assert not pattern.matches("logfile")

    def test_directory_pattern(self):
        pattern = IgnorePattern("temp", directory_only=True)
        assert pattern.matches("temp/file.txt")
        assert pattern.matches("temp/sub/file.txt")
        assert pattern.matches("temp", is_dir=True)
        assert not pattern.matches("temp")

    def test_double_star_pattern(self):
        pattern = IgnorePattern("**/test.log")
        assert pattern.matches("test.log")
        assert pattern.matches("dir/sub/test.log")

    def test_anchored_pattern(self):
        pattern = IgnorePattern("/root.txt")
        assert pattern.matches("root.txt")
        assert not pattern.matches("sub/root.txt")

    def test_question_mark_pattern(self):
        pattern = IgnorePattern("test?.txt")
        assert pattern.matches("test1.txt")
        assert not pattern.matches("test.txt")
        assert not pattern.matches("test12.txt")


class TestIgnoreMatcher:
    """Tests for the IgnoreMatcher class."""

    def test_empty_matcher(self):
        matcher = IgnoreMatcher()
        assert not matcher.is_ignored("test.txt")

    def test_comments_and_blanks_skipped(self):
        matcher = IgnoreMatcher()
        matcher.add_pattern("# comment")
        matcher.add_pattern("   ")
        assert matcher.patterns == []

    def test_negation_last_match_wins(self):
        matcher = IgnoreMatcher()
        matcher.add_pattern("*.log")
        matcher.add_pattern("!keep.log")
        assert matcher.is_ignored("drop.log")
        assert not matcher.is_ignored("keep.log")

    def test_load_file(self, tmp_path):
        (tmp_path / '.sprigignore').write_text("*.tmp\nbuild/\n")
        matcher = get_ignore_matcher(tmp_path)
        assert matcher.is_ignored("a.tmp")
        assert matcher.is_ignored("build/out.o")

    def test_load_missing_file(self, tmp_path):
        assert not IgnoreMatcher().load_file(tmp_path / 'nope')


def test_walk_files(tmp_path):
    for name in ['b.txt', 'a.txt', 'sub/c.txt', 'build/x.o', '.hidden', '.sprig/graph.json', 'z.tmp']:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(name)
    (tmp_path / '.sprigignore').write_text("*.tmp\nbuild/\n")

    names = list(walk_files(tmp_path, tmp_path, get_ignore_matcher(tmp_path)))
    assert names == ['a.txt', 'b.txt', 'sub/c.txt']


def test_walk_single_file(tmp_path):
    (tmp_path / 'sub').mkdir()
    (tmp_path / 'sub' / 'f.txt').write_text('x')
    names = list(walk_files(tmp_path, tmp_path / 'sub' / 'f.txt', IgnoreMatcher()))
    assert names == ['sub/f.txt']
