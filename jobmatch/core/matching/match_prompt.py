"""
Match analysis prompt.

Asks the model for a fixed-format narrative: a score line followed by
strengths, gaps, insights and a resume summary, in that order. The section
titles double as the markers the narrative parser slices on.

Dependencies: langchain_core.prompts
System role: Prompt template for match scoring
"""

from langchain_core.prompts import PromptTemplate

SCORE_LABEL = "Match Score"
STRENGTHS_MARKER = "Strengths Identified"
GAPS_MARKER = "Gaps Identified"
INSIGHTS_MARKER = "Key Insights"
SUMMARY_MARKER = "Resume Summary"

MATCH_PROMPT = PromptTemplate.from_template(
    """You are an experienced technical recruiter. Compare the candidate resume with the job description and write a match analysis in EXACTLY the format of this example.

Example:
⭐ Match Score: 78% — Strong Match

✅ Strengths Identified
- 4 years building REST APIs with Node.js and PostgreSQL
- Production Docker deployments behind Nginx
- Owns CI pipelines end to end

❌ Gaps Identified
- No Kubernetes or container orchestration experience
- No mention of GraphQL, which the role lists as required

📝 Key Insights
- Backend fundamentals cover most of the role's day-to-day work
- Cloud exposure is real but not yet production-scale

🎯 Resume Summary
Backend engineer focused on API design and relational databases, comfortable shipping containerised services.

JOB DESCRIPTION:
"{job_description}"

CANDIDATE RESUME:
"{resume}"

Rules:
- Keep the five sections, their titles and their order exactly as in the example
- One bullet per line in Strengths, Gaps and Insights
- The score is an integer percentage from 0 to 100
- Return ONLY the analysis: no JSON, no markdown headings, no extra commentary"""
)


def build_match_prompt(resume_text: str, job_description_text: str, excerpt_chars: int = 2000) -> str:
    """
    Render the match prompt with truncated document excerpts.

    Args:
        resume_text: Full resume text
        job_description_text: Full job description text
        excerpt_chars: Prefix length kept from each document

    Returns:
        str: Prompt text
    """
    return MATCH_PROMPT.format(
        job_description=job_description_text[:excerpt_chars],
        resume=resume_text[:excerpt_chars],
    )
