"""Object storage port (abstract interface).

Adapters accept a binary payload under a path and return a publicly
resolvable URL for it.
"""

from abc import ABC, abstractmethod


class StorageError(Exception):
    """The storage backend rejected or failed an upload."""


class ObjectStorage(ABC):
    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store ``data`` at ``path`` and return its public URL."""
        ...
