"""
Adapters package - External service connections.
MongoDB document storage and GridFS photo storage.
"""

from adapters import mongo_adapter, photo_storage

__all__ = [
    "mongo_adapter",
    "photo_storage",
]
