"""Unit tests for LocalFileStorage."""

from tessera_identity.infrastructure.storage import LocalFileStorage


class TestLocalFileStorage:
    def test_save_writes_random_name(self, tmp_path):
        storage = LocalFileStorage(tmp_path / "media", "/media/")

        url = storage.save(b"png-bytes", ".PNG")

        assert url.startswith("/media/")
        assert url.endswith(".png")
        path = storage.path_for(url)
        assert path is not None
        assert path.read_bytes() == b"png-bytes"

    def test_delete_removes_file(self, tmp_path):
        storage = LocalFileStorage(tmp_path)
        url = storage.save(b"data", "jpg")

        assert storage.delete(url) is True
        assert storage.delete(url) is False

    def test_foreign_references_are_ignored(self, tmp_path):
        outside = tmp_path / "secret.txt"
        outside.write_text("keep me")
        storage = LocalFileStorage(tmp_path / "media")

        assert storage.delete("/media/../secret.txt") is False
        assert storage.delete("https://cdn.example.com/a.png") is False
        assert storage.delete("/media/") is False
        assert outside.exists()
