"""In-memory object storage for development and testing."""

from catalogue.storage.port import ObjectStorage, StorageError


class FakeStorage(ObjectStorage):
    def __init__(self, base_url: str = "https://storage.example.test") -> None:
        self.base_url = base_url.rstrip("/")
        self.objects: dict[str, dict] = {}
        self.should_fail = False

    def configure(self, should_fail: bool) -> None:
        self.should_fail = should_fail

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        if self.should_fail:
            raise StorageError("Simulated storage failure")
        self.objects[path] = {"data": data, "content_type": content_type}
        return f"{self.base_url}/{path}"
