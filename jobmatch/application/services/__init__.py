"""
Application services.

Orchestration of analysis processing and follow-up questions.
"""

from jobmatch.application.services.analysis_service import AnalysisService
from jobmatch.application.services.chat_service import ChatService

__all__ = ["AnalysisService", "ChatService"]
