"""
Chunk and query embedder with deterministic fallback.

Embeds each text through the model gateway. A failure on one text is
replaced by a hashed bag-of-tokens vector so one bad unit never blocks the
batch. Every vector has the configured dimension; provider vectors of any
other length are rejected in favour of the fallback.

Dependencies: asyncio, hashlib, jobmatch.core.model_gateway
System role: Embedding stage of the indexing pipeline and query embedding
"""

import asyncio
import hashlib
import logging
import math
import re
from collections.abc import Sequence

from jobmatch.core.exceptions import ProviderUnavailable
from jobmatch.core.model_gateway import ModelGateway
from jobmatch.models.chunk import Chunk, DocumentType, EmbeddingSource

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"[a-z0-9+#]+(?:[./-][a-z0-9+#]+)*")


def fallback_embedding(text: str, dimension: int) -> list[float]:
    """
    Deterministic pseudo-embedding of a text.

    Each lower-cased token is hashed with SHA-256; the digest picks a bucket
    and a sign. The counts are L2-normalised. Texts without tokens map to the
    zero vector.

    Args:
        text: Text to embed
        dimension: Vector length

    Returns:
        list[float]: Vector of the requested dimension
    """
    vector = [0.0] * dimension
    for token in TOKEN_PATTERN.findall(text.lower()):
        digest = hashlib.sha256(token.encode("utf-8")).digest()
        bucket = int.from_bytes(digest[:8], "big") % dimension
        sign = 1.0 if digest[8] & 1 else -1.0
        vector[bucket] += sign

    norm = math.sqrt(sum(value * value for value in vector))
    if norm == 0:
        return vector
    return [value / norm for value in vector]


class EmbeddingProvider:
    """Gateway-backed embedder with per-unit deterministic fallback."""

    def __init__(
        self,
        gateway: ModelGateway,
        dimension: int = 768,
        delay_seconds: float = 0.1,
    ) -> None:
        """
        Initialize embedder.

        Args:
            gateway: Model gateway used for provider embedding calls
            dimension: Required vector length
            delay_seconds: Pause between successive provider calls
        """
        self._gateway = gateway
        self.dimension = dimension
        self._delay = delay_seconds

    async def embed_one(self, text: str) -> list[float]:
        """Embed a single text (typically a query)."""
        vector, _ = await self._embed_unit(text)
        return vector

    async def embed(self, chunks: Sequence[str]) -> list[list[float]]:
        """
        Embed texts in order.

        Args:
            chunks: Texts to embed

        Returns:
            list[list[float]]: One vector per text, all of the same length
        """
        return [vector for vector, _ in await self._embed_batch(chunks)]

    async def embed_chunks(
        self,
        chunks: Sequence[str],
        document_type: DocumentType,
    ) -> list[Chunk]:
        """
        Embed texts and wrap them as Chunk models.

        Args:
            chunks: Chunk texts in document order
            document_type: Source document type

        Returns:
            list[Chunk]: Embedded chunks tagged with their embedding source
        """
        results = await self._embed_batch(chunks)
        return [
            Chunk(
                index=index,
                content=text,
                embedding=vector,
                document_type=document_type,
                embedding_source=source,
            )
            for index, (text, (vector, source)) in enumerate(zip(chunks, results))
        ]

    async def _embed_batch(
        self,
        chunks: Sequence[str],
    ) -> list[tuple[list[float], EmbeddingSource]]:
        logger.info(f"{__name__}:_embed_batch - Embedding {len(chunks)} chunks")
        results = []
        provider_down = False
        for position, text in enumerate(chunks):
            if provider_down:
                results.append((fallback_embedding(text, self.dimension), EmbeddingSource.FALLBACK))
                continue
            if position and self._delay:
                await asyncio.sleep(self._delay)
            try:
                results.append(await self._embed_unit(text, raise_unavailable=True))
            except ProviderUnavailable as e:
                # No model resolved; don't re-probe every candidate per chunk
                logger.warning(f"{__name__}:_embed_batch - Provider unavailable, falling back: {e}")
                provider_down = True
                results.append((fallback_embedding(text, self.dimension), EmbeddingSource.FALLBACK))

        fallbacks = sum(1 for _, source in results if source is EmbeddingSource.FALLBACK)
        if fallbacks:
            logger.warning(
                f"{__name__}:_embed_batch - {fallbacks}/{len(chunks)} chunks used fallback embeddings"
            )
        return results

    async def _embed_unit(
        self,
        text: str,
        raise_unavailable: bool = False,
    ) -> tuple[list[float], EmbeddingSource]:
        try:
            vector = await self._gateway.embed(text)
        except ProviderUnavailable:
            if raise_unavailable:
                raise
            logger.warning(f"{__name__}:_embed_unit - Provider unavailable, using fallback")
            return fallback_embedding(text, self.dimension), EmbeddingSource.FALLBACK
        except Exception as e:
            logger.warning(
                f"{__name__}:_embed_unit - Provider embedding failed, using fallback: "
                f"{type(e).__name__}: {e}"
            )
            return fallback_embedding(text, self.dimension), EmbeddingSource.FALLBACK

        if len(vector) != self.dimension:
            logger.warning(
                f"{__name__}:_embed_unit - Provider returned {len(vector)} dimensions, "
                f"expected {self.dimension}; using fallback"
            )
            return fallback_embedding(text, self.dimension), EmbeddingSource.FALLBACK
        return [float(value) for value in vector], EmbeddingSource.PROVIDER
