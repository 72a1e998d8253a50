"""Projects commit snapshots back onto the working tree."""

import logging
from pathlib import Path
from typing import Dict

from .errors import Result
from .object_store import ObjectStore

logger = logging.getLogger(__name__)


class WorkingTreeSync:
    """
    Overwrites working-tree files with stored content.

    This is the only place commit state reaches the filesystem. Files that are
    not named in the snapshot are left alone.
    """

    def __init__(self, work_tree: Path):
        self.work_tree = Path(work_tree)

    def sync(self, snapshot: Dict[str, str], store: ObjectStore) -> Result:
        """
        Write every file of a snapshot.

        Every digest is read before anything is written, so a missing object
        leaves the working tree untouched.

        Args:
            snapshot: File name -> digest mapping
            store: ObjectStore holding the content

        Returns:
            Result carrying the number of files written, or ContentNotFound
        """
        contents = {}
        for name, digest in sorted(snapshot.items()):
            read = store.read(digest)
            if not read.success:
                return read
            contents[name] = read.value

        for name, data in contents.items():
            path = self.work_tree / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
            logger.debug("Restored %s", name)

        return Result.ok(len(contents))
