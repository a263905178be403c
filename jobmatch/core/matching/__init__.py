"""
Resume to job description matching.
"""

from jobmatch.core.matching.match_scorer import MatchScorer, heuristic_match
from jobmatch.core.matching.narrative_parser import (
    ParsedNarrative,
    UnparseableNarrative,
    parse_narrative,
)
from jobmatch.core.matching.skill_extractor import extract_skills

__all__ = [
    "MatchScorer",
    "heuristic_match",
    "ParsedNarrative",
    "UnparseableNarrative",
    "parse_narrative",
    "extract_skills",
]
