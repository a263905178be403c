"""
Question answering over retrieved context.
"""

from jobmatch.core.answering.answer_synthesizer import AnswerSynthesizer

__all__ = ["AnswerSynthesizer"]
