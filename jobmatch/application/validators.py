"""
Input validators shared by the application services.

Dependencies: re, jobmatch.core.exceptions
System role: Request input validation
"""

import re

from jobmatch.core.exceptions import InvalidInput

ANALYSIS_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{5,128}$")


def validate_analysis_id(analysis_id: object) -> str:
    """
    Check an analysis identifier is present and well formed.

    Raises:
        InvalidInput: When missing, not a string, or malformed
    """
    if not analysis_id:
        raise InvalidInput("analysis_id is required", field="analysis_id")
    if not isinstance(analysis_id, str) or not ANALYSIS_ID_PATTERN.fullmatch(analysis_id):
        raise InvalidInput("Invalid analysis_id format", field="analysis_id")
    return analysis_id


def validate_question(question: object) -> str:
    """
    Check a question is a non-blank string.

    Raises:
        InvalidInput: When missing or blank
    """
    if not isinstance(question, str) or not question.strip():
        raise InvalidInput("Question cannot be empty", field="question")
    return question.strip()
