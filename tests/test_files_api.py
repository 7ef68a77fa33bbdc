"""
Integration tests for the files API over a virtual storage.
"""

import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient

from vstorage.adapters.base import StorageAdapter
from vstorage.adapters.memory import MemoryAdapter
from vstorage.builder import StorageBuilder
from vstorage.adapters.registry import AdapterRegistry
from vstorage.main import app

# Create test client
client = TestClient(app)


@pytest.fixture
def adapters():
    """Attach a storage over two memory adapters to the application."""
    primary, replica = MemoryAdapter("primary"), MemoryAdapter("replica")
    storage = StorageBuilder(AdapterRegistry()).add_adapter(primary).add_adapter(replica).build()
    setattr(app.state, "storage", storage)
    try:
        yield primary, replica
    finally:
        app.state.storage = None


@pytest.fixture
def broken_storage():
    """Attach a storage whose only adapter always fails."""
    adapter = Mock(spec=StorageAdapter)
    adapter.get_name.return_value = "broken"
    adapter.get_stream.side_effect = IOError("disk error")
    adapter.put.side_effect = IOError("disk error")
    app.state.storage = StorageBuilder(AdapterRegistry()).add_adapter(adapter).build()
    try:
        yield adapter
    finally:
        app.state.storage = None


class TestFilesAPI:
    """Integration tests for the /api endpoints."""

    def test_health(self, adapters):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["strategy"] == "CallAllStrategy"

    def test_put_replicates_to_all_adapters(self, adapters):
        primary, replica = adapters

        response = client.put("/api/files/docs/readme.txt", content=b"hello")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"] == {"path": "docs/readme.txt", "size": 5}
        assert primary.get("docs/readme.txt") == b"hello"
        assert replica.get("docs/readme.txt") == b"hello"

    def test_get_falls_back_to_replica(self, adapters):
        _, replica = adapters
        replica.put("only/replica.txt", b"from replica")

        response = client.get("/api/files/only/replica.txt")

        assert response.status_code == 200
        assert response.content == b"from replica"

    def test_get_missing_file(self, adapters):
        response = client.get("/api/files/missing.txt")

        assert response.status_code == 404
        assert "missing.txt" in response.json()["detail"]

    def test_exists(self, adapters):
        primary, _ = adapters
        primary.put("a.txt", b"a")

        assert client.get("/api/exists/a.txt").json() == {"path": "a.txt", "exists": True}
        assert client.get("/api/exists/b.txt").json() == {"path": "b.txt", "exists": False}

    def test_rename(self, adapters):
        primary, replica = adapters
        client.put("/api/files/old.txt", content=b"x")

        response = client.post("/api/rename/old.txt", params={"new_path": "new.txt"})

        assert response.status_code == 200
        assert primary.exists("new.txt") and replica.exists("new.txt")

    def test_rename_missing_file(self, adapters):
        response = client.post("/api/rename/missing.txt", params={"new_path": "new.txt"})
        assert response.status_code == 409

    def test_delete(self, adapters):
        client.put("/api/files/gone.txt", content=b"x")

        assert client.delete("/api/files/gone.txt").status_code == 200
        assert client.delete("/api/files/gone.txt").status_code == 404

    def test_empty_path_is_rejected(self, adapters):
        """Test every route answers 400 for an empty file path."""
        primary, replica = adapters
        server_errors_client = TestClient(app, raise_server_exceptions=False)

        assert server_errors_client.get("/api/exists/").status_code == 400
        assert server_errors_client.get("/api/files/").status_code == 400
        assert server_errors_client.put("/api/files/", content=b"x").status_code == 400
        assert server_errors_client.delete("/api/files/").status_code == 400
        assert server_errors_client.post("/api/rename/", params={"new_path": "b.txt"}).status_code == 400
        assert server_errors_client.post("/api/rename/a.txt", params={"new_path": "/"}).status_code == 400
        assert not primary.exists("") and not replica.exists("")

    def test_empty_path_checked_before_storage(self, broken_storage):
        """Test an empty path never reaches a failing adapter."""
        assert client.get("/api/files/").status_code == 400
        broken_storage.get_stream.assert_not_called()

    def test_backend_failure(self, broken_storage):
        """Test adapter exceptions surface as 502 responses."""
        assert client.get("/api/files/a.txt").status_code == 502
        assert client.put("/api/files/a.txt", content=b"x").status_code == 502

    def test_storage_not_initialized(self):
        app.state.storage = None

        assert client.get("/api/files/a.txt").status_code == 503
