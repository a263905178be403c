"""
In-memory chat history store.

Append-only question/answer history per analysis for the process lifetime.

Dependencies: threading, jobmatch.models
System role: Chat message persistence
"""

import threading

from jobmatch.models.chat import ChatEntry


class ChatHistoryStore:
    """Append-only ChatEntry lists keyed by analysis identifier."""

    def __init__(self) -> None:
        self._entries: dict[str, list[ChatEntry]] = {}
        self._lock = threading.Lock()

    def append(self, analysis_id: str, entry: ChatEntry) -> None:
        with self._lock:
            self._entries.setdefault(analysis_id, []).append(entry)

    def get_entries(self, analysis_id: str, limit: int | None = None) -> list[ChatEntry]:
        """
        Entries for an analysis, oldest first.

        Args:
            analysis_id: Analysis identifier
            limit: Keep only the most recent entries

        Returns:
            list[ChatEntry]: Copy of the history, empty when there is none
        """
        with self._lock:
            entries = list(self._entries.get(analysis_id, ()))
        if limit is not None:
            return entries[-limit:] if limit > 0 else []
        return entries
