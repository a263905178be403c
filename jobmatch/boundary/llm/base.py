"""
Model handle protocol.

Capability interface the model gateway needs from a provider integration:
text generation and text embedding for one model identifier.

Dependencies: typing
System role: Provider capability contract
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ModelHandle(Protocol):
    """Generation and embedding capability bound to one model."""

    model_id: str

    async def generate(self, prompt: str) -> str:
        """Return the model's text completion for a prompt."""
        ...

    async def embed(self, text: str) -> list[float]:
        """Return an embedding vector for a text."""
        ...


HandleFactory = Callable[[str], ModelHandle]
