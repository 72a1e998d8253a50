"""Load and save the whole engine state.

State lives in three JSON documents next to the object directory::

    .sprig/
    ├── objects/     # Stored content copies
    ├── blobs.json   # ObjectStore registry
    ├── index.json   # StagingArea
    └── graph.json   # CommitGraph (commits, branches, head)

State is read once at the start of an operation and written once at the end.
Nothing here locks the files; two processes working on the same repository at
the same time will overwrite each other.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

from .graph import CommitGraph
from .hash import DEFAULT_COMMIT_ID_LENGTH, ContentHasher, HashlibHasher
from .index import StagingArea
from .object_store import ObjectStore
from .objects import ContentRecord

logger = logging.getLogger(__name__)


class Persistence:
    """Reads and writes ObjectStore, StagingArea and CommitGraph as a unit."""

    def __init__(self, sprig_dir: Path):
        """
        Initialize persistence.

        Args:
            sprig_dir: The repository's .sprig directory
        """
        self.sprig_dir = Path(sprig_dir)
        self.objects_dir = self.sprig_dir / 'objects'
        self.blobs_file = self.sprig_dir / 'blobs.json'
        self.index_file = self.sprig_dir / 'index.json'
        self.graph_file = self.sprig_dir / 'graph.json'

    def _read_json(self, path: Path, default):
        if not path.exists():
            return default
        return json.loads(path.read_text())

    def _write_json(self, path: Path, data) -> None:
        path.write_text(json.dumps(data, indent=2))

    def load_all(
        self,
        hasher: Optional[ContentHasher] = None,
        id_length: int = DEFAULT_COMMIT_ID_LENGTH,
    ) -> Tuple[ObjectStore, StagingArea, CommitGraph]:
        """
        Rehydrate the engine state.

        Missing files yield empty aggregates, so a freshly created layout
        loads cleanly.

        Args:
            hasher: ContentHasher shared by the store and the graph
            id_length: Commit id width for a graph that has not been saved yet

        Returns:
            Tuple of (ObjectStore, StagingArea, CommitGraph)

        Raises:
            ValueError: If a state file is not valid JSON
        """
        hasher = hasher or HashlibHasher()

        try:
            blobs = self._read_json(self.blobs_file, [])
            staged = self._read_json(self.index_file, {})
            graph_data = self._read_json(self.graph_file, None)
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt repository state: {e}")

        store = ObjectStore(self.objects_dir, hasher)
        for entry in blobs:
            store.register(ContentRecord.from_dict(entry))

        staging = StagingArea.from_dict(staged)

        if graph_data is None:
            graph = CommitGraph(hasher=hasher, id_length=id_length)
        else:
            graph = CommitGraph.from_dict(graph_data, hasher=hasher)

        logger.debug("Loaded %d objects, %d staged, %d commits",
                     len(store), len(staging), len(graph.commits))
        return store, staging, graph

    def save_all(self, store: ObjectStore, staging: StagingArea, graph: CommitGraph) -> None:
        """Persist all three aggregates."""
        self.sprig_dir.mkdir(parents=True, exist_ok=True)
        self._write_json(self.blobs_file, [r.to_dict() for r in store.records()])
        self._write_json(self.index_file, staging.to_dict())
        self._write_json(self.graph_file, graph.to_dict())
        logger.debug("Saved %d objects, %d staged, %d commits",
                     len(store), len(staging), len(graph.commits))
