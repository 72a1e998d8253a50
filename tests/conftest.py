"""Shared pytest fixtures for Sprig tests."""

import hashlib
import pytest
import tempfile
import shutil
from pathlib import Path

from sprig.core.config import Config
from sprig.core.graph import CommitGraph
from sprig.core.hash import ContentHasher
from sprig.core.repository import Repository

AUTHOR = "Test User <test@example.com>"


class CollidingHasher(ContentHasher):
    """
    SHA-1 hasher whose digests all start with '000000'.

    Salted payloads hash normally, so truncated commit ids collide until
    the graph rehashes.
    """

    def hash(self, data: bytes) -> str:
        digest = hashlib.sha1(data).hexdigest()
        if b'\nsalt ' in data:
            return digest
        return '000000' + digest[6:]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the real ~/.sprigconfig and OS user name."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.sprigconfig')
    monkeypatch.setenv('SPRIG_USER_NAME', 'Test User')
    monkeypatch.setenv('SPRIG_USER_EMAIL', 'test@example.com')
    for key in ('SPRIG_CORE_COMMITIDLENGTH', 'SPRIG_CORE_HASHALGORITHM'):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init(timestamp=1000)
    return repo


@pytest.fixture
def write_file(repo):
    """Write a working-tree file and return its path."""
    def _write(name, content):
        path = repo.work_tree / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def commit_files(repo, write_file):
    """Write, stage and commit files in one step; returns the new Commit."""
    counter = {'ts': 2000}

    def _commit(files, message="Test commit"):
        for name, content in files.items():
            write_file(name, content)
        repo.add(list(files)).unwrap()
        counter['ts'] += 1
        return repo.commit(message, timestamp=counter['ts']).unwrap()
    return _commit


@pytest.fixture
def graph():
    """Empty commit graph with the default hasher."""
    return CommitGraph()


@pytest.fixture
def rooted_graph(graph):
    """Graph holding only an empty root commit with id 'root'."""
    graph.commit(0, 'initial commit', AUTHOR, {}, commit_id='root')
    return graph
