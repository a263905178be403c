"""
Match narrative parser.

Slices the model's fixed-format analysis into score and sections. The
result is tagged: ParsedNarrative when a score line and at least one
section marker were found, UnparseableNarrative otherwise, so callers can
fall back instead of trusting an empty parse.

Dependencies: re, jobmatch.models.match
System role: Free text to structured match fields
"""

import re
from dataclasses import dataclass, field

from jobmatch.core.matching.match_prompt import (
    GAPS_MARKER,
    INSIGHTS_MARKER,
    SCORE_LABEL,
    STRENGTHS_MARKER,
    SUMMARY_MARKER,
)
from jobmatch.models.match import NarrativeSections

SCORE_PATTERN = re.compile(rf"{SCORE_LABEL}\W*?(\d{{1,3}})\s*%", re.IGNORECASE)
SECTION_MARKERS = tuple(
    (key, re.compile(re.escape(marker), re.IGNORECASE))
    for key, marker in (
        ("strengths", STRENGTHS_MARKER),
        ("gaps", GAPS_MARKER),
        ("insights", INSIGHTS_MARKER),
        ("summary", SUMMARY_MARKER),
    )
)
BULLET_PREFIX = re.compile(r"^(?:[-*•·▪–]|\d+[.)])\s*")


@dataclass(frozen=True)
class ParsedNarrative:
    score: int
    strengths: list[str]
    gaps: list[str]
    insights: list[str]
    summary: str
    sections: NarrativeSections


@dataclass(frozen=True)
class UnparseableNarrative:
    reason: str
    raw_text: str = field(repr=False, default="")


NarrativeParse = ParsedNarrative | UnparseableNarrative


def _line_start(text: str, position: int) -> int:
    return text.rfind("\n", 0, position) + 1


def _line_end(text: str, position: int) -> int:
    end = text.find("\n", position)
    return len(text) if end == -1 else end + 1


def _items(body: str) -> list[str]:
    items = []
    for line in body.splitlines():
        line = BULLET_PREFIX.sub("", line.strip()).strip()
        if line:
            items.append(line)
    return items


def parse_narrative(text: str) -> NarrativeParse:
    """
    Parse a match narrative.

    A section runs from the line after its marker to the line holding the
    next marker found in the text. A missing marker gives an empty section.

    Args:
        text: Model response

    Returns:
        NarrativeParse: ParsedNarrative, or UnparseableNarrative with a reason
    """
    if not text or not text.strip():
        return UnparseableNarrative("empty response", text or "")

    score_match = SCORE_PATTERN.search(text)
    if score_match is None:
        return UnparseableNarrative("no match score line", text)

    positions = []
    for key, marker in SECTION_MARKERS:
        found = marker.search(text)
        if found:
            positions.append((found.start(), key))
    if not positions:
        return UnparseableNarrative("no section markers", text)

    positions.sort()
    bodies = {key: "" for key, _ in SECTION_MARKERS}
    for order, (index, key) in enumerate(positions):
        start = _line_end(text, index)
        if order + 1 < len(positions):
            end = _line_start(text, positions[order + 1][0])
        else:
            end = len(text)
        bodies[key] = text[start:end].strip() if end > start else ""

    score_line_start = _line_start(text, score_match.start())
    sections = NarrativeSections(
        raw_text=text,
        score_line=text[score_line_start:_line_end(text, score_match.start())].strip(),
        **bodies,
    )
    return ParsedNarrative(
        score=max(0, min(100, int(score_match.group(1)))),
        strengths=_items(bodies["strengths"]),
        gaps=_items(bodies["gaps"]),
        insights=_items(bodies["insights"]),
        summary=" ".join(_items(bodies["summary"])),
        sections=sections,
    )
