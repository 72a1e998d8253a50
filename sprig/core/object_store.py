"""Content-addressed object store for Sprig.

Every distinct piece of content is kept exactly once, keyed by its digest.
Copies are zlib-compressed and sharded by the first two characters of the
digest::

    .sprig/objects/<d2>/<rest-of-digest>

The store is write-once: ingesting the same bytes again is a no-op. It does not
count references; removing a digest that a commit still needs is the caller's
responsibility.
"""

import logging
import zlib
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import Result, content_not_found
from .hash import ContentHasher, HashlibHasher
from .objects import ContentRecord

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Registry of ContentRecords plus their physical copies.

    Stored locations are recorded relative to the objects directory so a
    repository can be moved without rewriting the registry.
    """

    def __init__(self, objects_dir: Path, hasher: Optional[ContentHasher] = None):
        """
        Initialize object store.

        Args:
            objects_dir: Directory holding the stored copies
            hasher: ContentHasher used to compute digests (SHA-1 by default)
        """
        self.objects_dir = Path(objects_dir)
        self.hasher = hasher or HashlibHasher()
        self._records: Dict[str, ContentRecord] = {}

    def slot_for(self, digest: str) -> str:
        """Storage slot (relative path) for a digest."""
        return f"{digest[:2]}/{digest[2:]}"

    def ingest(self, contents: Iterable[Tuple[bytes, str]]) -> List[str]:
        """
        Store content, deduplicating by digest.

        Args:
            contents: (bytes, origin_location) pairs

        Returns:
            Digest of each item, in input order
        """
        digests = []
        for data, origin in contents:
            digest = self.hasher.hash(data)
            digests.append(digest)

            if digest in self._records:
                logger.debug("Object %s already stored, skipped (%s)", digest[:8], origin)
                continue

            slot = self.slot_for(digest)
            path = self.objects_dir / slot
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(zlib.compress(data))

            self._records[digest] = ContentRecord(digest, slot, origin)
            logger.debug("Stored object %s (%d bytes) from %s", digest[:8], len(data), origin)

        return digests

    def ingest_file(self, path: Path, origin: str) -> str:
        """
        Store the contents of a file.

        Args:
            path: File to read
            origin: Working-tree relative name to remember

        Returns:
            Digest of the file content
        """
        return self.ingest([(Path(path).read_bytes(), origin)])[0]

    def lookup(self, digest: str) -> Result:
        """
        Find the record for a digest.

        Returns:
            Result carrying the ContentRecord, or ContentNotFound
        """
        record = self._records.get(digest)
        if record is None:
            return content_not_found(digest)
        return Result.ok(record)

    def read(self, digest: str) -> Result:
        """
        Read stored bytes for a digest.

        Returns:
            Result carrying the content bytes, or ContentNotFound
        """
        lookup = self.lookup(digest)
        if not lookup.success:
            return lookup

        path = self.objects_dir / lookup.value.stored_location
        if not path.exists():
            return content_not_found(digest)
        return Result.ok(zlib.decompress(path.read_bytes()))

    def remove(self, digest: str) -> Result:
        """
        Delete the stored copy and the registry entry.

        Returns:
            Result carrying the removed ContentRecord, or ContentNotFound
        """
        record = self._records.get(digest)
        if record is None:
            return content_not_found(digest)

        path = self.objects_dir / record.stored_location
        if path.exists():
            path.unlink()
            try:
                path.parent.rmdir()
            except OSError:
                pass  # shard directory still holds other objects

        del self._records[digest]
        logger.debug("Removed object %s", digest[:8])
        return Result.ok(record)

    def register(self, record: ContentRecord) -> None:
        """Add an already-stored record (used when loading persisted state)."""
        self._records[record.digest] = record

    def records(self) -> List[ContentRecord]:
        """All records, sorted by digest."""
        return [self._records[d] for d in sorted(self._records)]

    def is_available(self, digest: str) -> bool:
        """True if the digest is registered and its stored copy is on disk."""
        record = self._records.get(digest)
        return record is not None and (self.objects_dir / record.stored_location).exists()

    def __contains__(self, digest: str) -> bool:
        return digest in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ObjectStore(objects={len(self._records)})"
