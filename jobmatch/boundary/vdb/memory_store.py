"""
Process-wide in-memory vector store.

Holds embedded chunk sets keyed by (analysis_id, document_type). Entries live
for the process lifetime; there is no eviction.

Dependencies: threading, jobmatch.models
System role: Vector storage for per-analysis retrieval
"""

import logging
import threading
from collections.abc import Sequence

from jobmatch.models.chunk import Chunk, DocumentType

logger = logging.getLogger(__name__)


class InMemoryVectorStore:
    """
    Keyed store of chunk-embedding sets.

    Writes replace the whole value for a key (last write wins, never a
    partial overwrite). Reads of an unknown key return an empty tuple.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, DocumentType], tuple[Chunk, ...]] = {}
        self._lock = threading.Lock()

    def put(
        self,
        analysis_id: str,
        document_type: DocumentType,
        chunks: Sequence[Chunk],
    ) -> None:
        """
        Store the embedded chunks of one document.

        Args:
            analysis_id: Analysis identifier (key namespace)
            document_type: Resume or job description
            chunks: Embedded chunks in document order
        """
        key = (analysis_id, DocumentType(document_type))
        with self._lock:
            replaced = key in self._entries
            self._entries[key] = tuple(chunks)
        logger.info(
            f"{__name__}:put - Stored {len(chunks)} {key[1].value} chunks "
            f"for analysis {analysis_id} (replaced={replaced})"
        )

    def get(self, analysis_id: str, document_type: DocumentType) -> tuple[Chunk, ...]:
        """
        Fetch the chunks stored for one document.

        Returns:
            tuple[Chunk, ...]: Stored chunks, empty when the key is absent
        """
        with self._lock:
            return self._entries.get((analysis_id, DocumentType(document_type)), ())

    def get_all(self, analysis_id: str) -> tuple[Chunk, ...]:
        """Resume chunks followed by job description chunks for an analysis."""
        with self._lock:
            resume = self._entries.get((analysis_id, DocumentType.RESUME), ())
            job = self._entries.get((analysis_id, DocumentType.JOB_DESCRIPTION), ())
        return resume + job

    def delete(self, analysis_id: str) -> int:
        """
        Drop every entry of an analysis.

        Returns:
            int: Number of keys removed
        """
        with self._lock:
            keys = [key for key in self._entries if key[0] == analysis_id]
            for key in keys:
                del self._entries[key]
        return len(keys)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
