"""
Vector database boundary layer.

- InMemoryVectorStore: process-wide keyed chunk store
"""

from jobmatch.boundary.vdb.memory_store import InMemoryVectorStore

__all__ = ["InMemoryVectorStore"]
