"""
Paragraph-first document chunker.

Splits text on blank lines into paragraphs. Paragraphs within the size limit
become one chunk; longer paragraphs are split into sentences that are
greedily packed into chunks. A sentence longer than the limit is kept whole.

Dependencies: re
System role: First stage of the document indexing pipeline
"""

import re

PARAGRAPH_BOUNDARY = re.compile(r"\n\s*\n")
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


class DocumentChunker:
    """Deterministic text to chunk splitter."""

    def __init__(self, chunk_size: int = 800) -> None:
        """
        Initialize chunker.

        Args:
            chunk_size: Maximum chunk size in characters

        Raises:
            ValueError: When chunk_size is not positive
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size

    def chunk(self, text: str) -> list[str]:
        """
        Split text into ordered chunks.

        Args:
            text: Plain document text

        Returns:
            list[str]: Non-empty chunks in document order
        """
        if not text or not text.strip():
            return []

        chunks: list[str] = []
        for paragraph in PARAGRAPH_BOUNDARY.split(text):
            paragraph = paragraph.strip()
            if not paragraph:
                continue
            if len(paragraph) <= self.chunk_size:
                chunks.append(paragraph)
            else:
                chunks.extend(self._pack_sentences(paragraph))
        return chunks

    def _pack_sentences(self, paragraph: str) -> list[str]:
        """Greedily pack the sentences of an oversized paragraph."""
        packed: list[str] = []
        current = ""
        for sentence in SENTENCE_BOUNDARY.split(paragraph):
            sentence = sentence.strip()
            if not sentence:
                continue
            candidate = f"{current} {sentence}" if current else sentence
            if len(candidate) <= self.chunk_size:
                current = candidate
                continue
            if current:
                packed.append(current)
            current = sentence
        if current:
            packed.append(current)
        return packed
