"""Object storage on the local filesystem, served by a static file host."""

from pathlib import Path

from catalogue.storage.port import ObjectStorage, StorageError


class LocalStorage(ObjectStorage):
    def __init__(self, root: str, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def upload(self, path: str, data: bytes, content_type: str) -> str:  # noqa: ARG002
        target = (self.root / path).resolve()
        if self.root.resolve() not in target.parents:
            raise StorageError(f"Refusing to write outside storage root: {path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(str(exc)) from exc
        return f"{self.base_url}/{path}"
