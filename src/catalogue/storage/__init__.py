"""Object storage factory.

Provides get_storage() / set_storage() to swap implementations:
- FakeStorage for development and testing
- LocalStorage when STORAGE_BACKEND=local
"""

from catalogue.storage.fake_adapter import FakeStorage
from catalogue.storage.local_adapter import LocalStorage
from catalogue.storage.port import ObjectStorage
from shared.config import env_str

_current_storage: ObjectStorage | None = None


def get_storage() -> ObjectStorage:
    """Return the current storage adapter. Defaults to FakeStorage."""
    global _current_storage
    if _current_storage is None:
        if env_str("STORAGE_BACKEND", "fake").lower() == "local":
            _current_storage = LocalStorage(
                root=env_str("STORAGE_ROOT", "media"),
                base_url=env_str("STORAGE_BASE_URL", "http://localhost:8000/media"),
            )
        else:
            _current_storage = FakeStorage()
    return _current_storage


def set_storage(storage: ObjectStorage) -> None:
    """Override the active storage adapter (useful for tests)."""
    global _current_storage
    _current_storage = storage


def reset_storage() -> None:
    """Reset to default storage."""
    global _current_storage
    _current_storage = None
