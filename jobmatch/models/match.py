"""
Match assessment models.

Structured compatibility assessment between a resume and a job description.

Dependencies: pydantic
System role: Match result data structures
"""

import enum

from pydantic import BaseModel, ConfigDict, Field


class MatchSource(str, enum.Enum):
    """
    How a match result was produced.

    GENERATED: Parsed from the model's narrative analysis
    HEURISTIC: Deterministic skill-overlap fallback
    """

    GENERATED = "generated"
    HEURISTIC = "heuristic"


class NarrativeSections(BaseModel):
    """Raw fields sliced out of the narrative analysis."""

    model_config = ConfigDict(frozen=True)

    raw_text: str = ""
    score_line: str = ""
    strengths: str = ""
    gaps: str = ""
    insights: str = ""
    summary: str = ""


class MatchResult(BaseModel):
    """Compatibility assessment. Every field is populated, even in degraded mode."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100, description="Match score percentage")
    strengths: list[str] = Field(default_factory=list)
    gaps: list[str] = Field(default_factory=list)
    insights: list[str] = Field(default_factory=list)
    summary: str = ""
    source: MatchSource
    narrative: NarrativeSections | None = Field(
        default=None,
        description="Raw narrative fields (generated path only)",
    )
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
