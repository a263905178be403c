"""
Match scorer with heuristic fallback.

Primary path: ask the model for the fixed-format narrative and parse it.
Any provider failure or unparseable narrative switches to a deterministic
skill-overlap score, so a MatchResult with every field populated is always
returned.

Dependencies: jobmatch.core.model_gateway, jobmatch.core.matching
System role: Compatibility assessment of a resume against a job description
"""

import logging

from jobmatch.core.matching.match_prompt import build_match_prompt
from jobmatch.core.matching.narrative_parser import ParsedNarrative, parse_narrative
from jobmatch.core.matching.skill_extractor import extract_skills, skills_overlap
from jobmatch.core.model_gateway import ModelGateway
from jobmatch.models.match import MatchResult, MatchSource

logger = logging.getLogger(__name__)


def match_band(score: int) -> str:
    """Strong / moderate / weak label for a score."""
    if score >= 80:
        return "strong"
    if score >= 60:
        return "moderate"
    return "weak"


def heuristic_match(resume_text: str, job_description_text: str) -> MatchResult:
    """
    Skill-overlap match score.

    required = skills of the job description; a required skill is matched
    when some resume skill contains it or is contained in it
    (case-insensitive). score = round(100 * matched / required), 0 when
    nothing is required.

    Args:
        resume_text: Candidate resume text
        job_description_text: Job description text

    Returns:
        MatchResult: Heuristic assessment
    """
    resume_skills = extract_skills(resume_text, include_parts=True)
    required = extract_skills(job_description_text)

    matched = [
        skill for skill in required
        if any(skills_overlap(skill, candidate) for candidate in resume_skills)
    ]
    missing = [skill for skill in required if skill not in matched]

    # Half-up rounding, not Python's banker's rounding
    score = int(100 * len(matched) / len(required) + 0.5) if required else 0
    band = match_band(score)

    insights = [
        f"Match score: {score}%. {band.capitalize()} match for this role.",
        f"Key strengths: {', '.join(matched[:5]) or 'none identified'}",
        f"Missing skills: {', '.join(missing[:5]) or 'none identified'}",
    ]
    summary = (
        f"Based on skill matching analysis, the candidate has {len(matched)} out of "
        f"{len(required)} required skills and is a {band} match for this role."
    )
    return MatchResult(
        score=score,
        strengths=matched,
        gaps=missing,
        insights=insights,
        summary=summary,
        source=MatchSource.HEURISTIC,
        matched_skills=matched,
        missing_skills=missing,
    )


class MatchScorer:
    """Resume to job description compatibility scorer."""

    def __init__(self, gateway: ModelGateway, excerpt_chars: int = 2000) -> None:
        """
        Initialize scorer.

        Args:
            gateway: Model gateway used for the narrative analysis
            excerpt_chars: Prefix length of each document sent to the model
        """
        self._gateway = gateway
        self._excerpt_chars = excerpt_chars

    async def score(self, resume_text: str, job_description_text: str) -> MatchResult:
        """
        Assess how well a resume fits a job description.

        Args:
            resume_text: Candidate resume text
            job_description_text: Job description text

        Returns:
            MatchResult: Generated assessment, or the heuristic one on failure
        """
        prompt = build_match_prompt(resume_text, job_description_text, self._excerpt_chars)
        try:
            narrative = await self._gateway.generate(prompt)
        except Exception as e:
            logger.warning(
                f"{__name__}:score - Narrative generation failed, using skill overlap: "
                f"{type(e).__name__}: {e}"
            )
            return heuristic_match(resume_text, job_description_text)

        parsed = parse_narrative(narrative)
        if not isinstance(parsed, ParsedNarrative):
            logger.warning(
                f"{__name__}:score - Narrative unparseable ({parsed.reason}), using skill overlap"
            )
            return heuristic_match(resume_text, job_description_text)

        logger.info(f"{__name__}:score - Generated match score {parsed.score}%")
        return MatchResult(
            score=parsed.score,
            strengths=parsed.strengths,
            gaps=parsed.gaps,
            insights=parsed.insights,
            summary=parsed.summary,
            source=MatchSource.GENERATED,
            narrative=parsed.sections,
        )
