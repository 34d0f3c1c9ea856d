"""Storage collaborators for the analytics core."""

from flowchain.storage.interface import AnalyticsStorage, StorageError
from flowchain.storage.memory_storage import InMemoryStorage

__all__ = ["AnalyticsStorage", "InMemoryStorage", "StorageError"]
