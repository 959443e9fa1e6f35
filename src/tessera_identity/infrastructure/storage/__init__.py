from tessera_identity.infrastructure.storage.local_file_storage import LocalFileStorage

__all__ = ["LocalFileStorage"]
