"""Hash utilities for Sprig."""

import hashlib
from abc import ABC, abstractmethod

DEFAULT_ALGORITHM = 'sha1'

# Commit ids are truncated to this many hex characters unless configured
# otherwise. Short ids are readable but collide long before full digests do.
DEFAULT_COMMIT_ID_LENGTH = 6


class ContentHasher(ABC):
    """Produces fixed-length hex digests for content and commit metadata."""

    @abstractmethod
    def hash(self, data: bytes) -> str:
        """
        Compute the digest of data.

        Args:
            data: Bytes to hash

        Returns:
            Hex digest string
        """


class HashlibHasher(ContentHasher):
    """ContentHasher backed by any :mod:`hashlib` algorithm."""

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM):
        """
        Initialize hasher.

        Args:
            algorithm: hashlib algorithm name (e.g. 'sha1', 'sha256')

        Raises:
            ValueError: If hashlib does not know the algorithm
        """
        hashlib.new(algorithm)
        self.algorithm = algorithm

    def hash(self, data: bytes) -> str:
        return hashlib.new(self.algorithm, data).hexdigest()

    def __repr__(self) -> str:
        return f"HashlibHasher({self.algorithm})"


def truncate_id(digest: str, length: int) -> str:
    """
    Shorten a digest to a commit id.

    Args:
        digest: Full hex digest
        length: Desired width; 0 or anything >= len(digest) keeps the full digest

    Returns:
        The leading ``length`` characters of the digest
    """
    if length <= 0 or length >= len(digest):
        return digest
    return digest[:length]
