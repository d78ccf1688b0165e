from .data_access import DataAccess, InMemoryDataAccess, StorageError

__all__ = ["DataAccess", "InMemoryDataAccess", "StorageError"]
