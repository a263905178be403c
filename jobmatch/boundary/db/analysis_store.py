"""
In-memory analysis store.

Process-wide keyed map of Analysis records plus the set of identifiers
currently being processed. The in-progress set is claimed with an atomic
check-and-insert so two processing runs of one analysis cannot both start.

Dependencies: threading, jobmatch.models
System role: Analysis persistence for the process lifetime
"""

import threading

from jobmatch.models.analysis import Analysis


class AnalysisStore:
    """Keyed Analysis storage with a processing claim set."""

    def __init__(self) -> None:
        self._analyses: dict[str, Analysis] = {}
        self._in_progress: set[str] = set()
        self._lock = threading.Lock()

    def save(self, analysis: Analysis) -> Analysis:
        """Insert or replace an analysis record."""
        with self._lock:
            self._analyses[analysis.id] = analysis
        return analysis

    def get(self, analysis_id: str) -> Analysis | None:
        with self._lock:
            return self._analyses.get(analysis_id)

    def try_claim(self, analysis_id: str) -> bool:
        """
        Mark an analysis as being processed.

        Returns:
            bool: False when another run already holds the claim
        """
        with self._lock:
            if analysis_id in self._in_progress:
                return False
            self._in_progress.add(analysis_id)
            return True

    def release(self, analysis_id: str) -> None:
        with self._lock:
            self._in_progress.discard(analysis_id)

    def in_progress(self) -> list[str]:
        with self._lock:
            return sorted(self._in_progress)

    def __len__(self) -> int:
        with self._lock:
            return len(self._analyses)
