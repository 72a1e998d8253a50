"""Tests for projecting snapshots onto the working tree."""

from sprig.core.errors import ErrorKind
from sprig.core.object_store import ObjectStore
from sprig.core.worktree import WorkingTreeSync


def test_sync_writes_files(tmp_path):
    store = ObjectStore(tmp_path / 'objects')
    digest_a, digest_b = store.ingest([(b'alpha', 'a.txt'), (b'beta', 'sub/b.txt')])
    work = tmp_path / 'work'
    work.mkdir()
    (work / 'a.txt').write_text('stale')
    (work / 'other.txt').write_text('untouched')

    result = WorkingTreeSync(work).sync({'a.txt': digest_a, 'sub/b.txt': digest_b}, store)

    assert result.value == 2
    assert (work / 'a.txt').read_bytes() == b'alpha'
    assert (work / 'sub' / 'b.txt').read_bytes() == b'beta'
    assert (work / 'other.txt').read_text() == 'untouched'


def test_sync_missing_object_writes_nothing(tmp_path):
    store = ObjectStore(tmp_path / 'objects')
    [digest] = store.ingest([(b'alpha', 'a.txt')])
    work = tmp_path / 'work'
    work.mkdir()

    result = WorkingTreeSync(work).sync({'a.txt': digest, 'b.txt': 'f' * 40}, store)

    assert result.kind == ErrorKind.CONTENT_NOT_FOUND
    assert not (work / 'a.txt').exists()
