"""
Process-lifetime record storage.

- AnalysisStore: Analysis records and processing claims
- ChatHistoryStore: per-analysis question/answer history
"""

from jobmatch.boundary.db.analysis_store import AnalysisStore
from jobmatch.boundary.db.chat_history_store import ChatHistoryStore

__all__ = ["AnalysisStore", "ChatHistoryStore"]
