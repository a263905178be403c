"""
Grounded answer prompt.

Instructs the model to answer only from the supplied resume and job
description excerpts and to say so when the answer is not there.

Dependencies: langchain_core.prompts
System role: Prompt template for question answering
"""

from collections.abc import Sequence

from langchain_core.prompts import PromptTemplate

ANSWER_PROMPT = PromptTemplate.from_template(
    """You answer questions about a candidate's resume and a job description.

## Instructions
1. Use ONLY the context below to answer
2. If the context does not contain the answer, say clearly that the documents do not mention it
3. Do not invent employers, dates, skills or qualifications
4. Be concise: under 100 words, as a short list when that reads better

Context:
{context}

Question: "{question}"

Answer:"""
)


def build_answer_prompt(question: str, context: Sequence[str]) -> str:
    """
    Render the answer prompt.

    Args:
        question: User question
        context: Retrieved chunk texts, most relevant first

    Returns:
        str: Prompt text
    """
    return ANSWER_PROMPT.format(context="\n\n".join(context), question=question)
