"""
Grounded answer synthesis with extractive fallback.

Sends a grounding prompt through the model gateway. When generation fails
the answer is assembled from resume section headers found in the context,
so a question always gets some answer unless there is no context at all.

Dependencies: jobmatch.core.model_gateway, jobmatch.core.answering.answer_prompt
System role: Answer stage of the RAG question flow
"""

import logging
import re
from collections.abc import Sequence

from jobmatch.core.answering.answer_prompt import build_answer_prompt
from jobmatch.core.exceptions import NoContextAvailable
from jobmatch.core.model_gateway import ModelGateway

logger = logging.getLogger(__name__)

SKILLS_PATTERN = re.compile(
    r"(?:technical skills|skills|proficiency|knowledge|familiarity|experience):\s*([^\n\r]+)",
    re.IGNORECASE,
)
EXPERIENCE_PATTERN = re.compile(
    r"(?:professional experience|work experience|experience):\s*([^\n\r]+)",
    re.IGNORECASE,
)
EDUCATION_PATTERN = re.compile(
    r"(?:education|degree|bachelor|master):\s*([^\n\r]+)",
    re.IGNORECASE,
)
SKILL_SEPARATOR = re.compile(r"[,;]|\band\b", re.IGNORECASE)

TECHNICAL_TERMS = (
    "AWS", "GCP", "Kubernetes", "Docker", "Terraform", "Python", "Bash", "Linux",
    "Jenkins", "GitLab", "CI/CD", "Monitoring", "Prometheus", "Grafana", "Cloud",
)

INSUFFICIENT_CONTEXT_ANSWER = (
    "Based on the provided context, I can see information about a candidate. "
    "For your specific question, I would need more detailed context to provide a precise answer."
)


class AnswerSynthesizer:
    """Answers a question from retrieved context."""

    def __init__(self, gateway: ModelGateway, snippet_chars: int = 50) -> None:
        """
        Initialize synthesizer.

        Args:
            gateway: Model gateway used for generation
            snippet_chars: Snippet length used by the extractive fallback
        """
        self._gateway = gateway
        self._snippet_chars = snippet_chars

    async def answer(self, question: str, context: Sequence[str]) -> str:
        """
        Answer a question from context texts.

        Args:
            question: User question
            context: Context texts, most relevant first

        Returns:
            str: Generated answer, or an extractive one if generation failed

        Raises:
            NoContextAvailable: When there is no non-blank context
        """
        texts = [text for text in context if text and text.strip()]
        if not texts:
            raise NoContextAvailable()

        try:
            answer = await self._gateway.generate(build_answer_prompt(question, texts))
        except Exception as e:
            logger.warning(
                f"{__name__}:answer - Generation failed, using extractive fallback: "
                f"{type(e).__name__}: {e}"
            )
            return self.extract_answer(question, texts)

        answer = answer.strip()
        if not answer:
            logger.warning(f"{__name__}:answer - Empty generation, using extractive fallback")
            return self.extract_answer(question, texts)
        return answer

    def extract_answer(self, question: str, context: Sequence[str]) -> str:
        """
        Deterministic answer built from section headers in the context.

        Args:
            question: User question
            context: Context texts

        Returns:
            str: Extracted answer, or a generic insufficient-context message
        """
        context_text = "\n\n".join(context)
        skills_match = SKILLS_PATTERN.search(context_text)

        if "skill" in question.lower():
            if skills_match:
                items = [item.strip() for item in SKILL_SEPARATOR.split(skills_match.group(1))]
                items = [item for item in items if item]
                if items:
                    return f"Key skills: {', '.join(items[:5])}"
            else:
                lowered = context_text.lower()
                found = [term for term in TECHNICAL_TERMS if term.lower() in lowered]
                if found:
                    return f"Identified skills: {', '.join(found[:5])}"

        lines = []
        for label, match in (
            ("Skills", skills_match),
            ("Experience", EXPERIENCE_PATTERN.search(context_text)),
            ("Education", EDUCATION_PATTERN.search(context_text)),
        ):
            if match:
                lines.append(f"{label}: {match.group(1)[: self._snippet_chars]}...")

        if not lines:
            return INSUFFICIENT_CONTEXT_ANSWER
        return "\n".join(lines)
