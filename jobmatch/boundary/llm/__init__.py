"""
Model provider boundary.

- ModelHandle: generation/embedding capability protocol
- GeminiModelHandle: Google Gemini implementation (LangChain integration)
"""

from jobmatch.boundary.llm.base import HandleFactory, ModelHandle


def get_gemini_handle_factory():
    """Lazy import so the Gemini client is only loaded when it is used."""
    from jobmatch.boundary.llm.gemini_client import gemini_handle_factory
    return gemini_handle_factory


__all__ = ["ModelHandle", "HandleFactory", "get_gemini_handle_factory"]
