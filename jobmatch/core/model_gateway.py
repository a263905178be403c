"""
Model gateway with ordered fallback and a first-success-wins cache.

Resolves a working generation/embedding model from an ordered preference
list by probing each candidate, then a single fallback identifier. The
first model that answers is cached process-wide and reused without
revalidation. Calls made through the cached model are timed out, and a run
of consecutive failures drops the cache so the next call re-probes.

Dependencies: asyncio, jobmatch.boundary.llm, jobmatch.core.exceptions
System role: Provider selection and call policy for every model request
"""

import asyncio
import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass

from jobmatch.boundary.llm.base import HandleFactory, ModelHandle
from jobmatch.configs.provider import ProviderSettings
from jobmatch.core.exceptions import ProviderUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of probing one candidate model."""

    model_id: str
    handle: ModelHandle | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.handle is not None and self.error is None


class ModelCache:
    """
    Shared "known good" model cell.

    The first writer wins; later writers get the existing value back.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entry: tuple[ModelHandle, str] | None = None

    def get(self) -> tuple[ModelHandle, str] | None:
        with self._lock:
            return self._entry

    def set_if_empty(self, handle: ModelHandle, model_id: str) -> tuple[ModelHandle, str]:
        """
        Store a model unless one is already cached.

        Returns:
            tuple[ModelHandle, str]: The cached entry after the call
        """
        with self._lock:
            if self._entry is None:
                self._entry = (handle, model_id)
            return self._entry

    def clear(self, model_id: str | None = None) -> bool:
        """
        Drop the cached model.

        Args:
            model_id: Only clear if the cached model has this identifier

        Returns:
            bool: True when an entry was removed
        """
        with self._lock:
            if self._entry is None:
                return False
            if model_id is not None and self._entry[1] != model_id:
                return False
            self._entry = None
            return True


class ModelGateway:
    """Prioritized model selection memoized after the first success."""

    def __init__(
        self,
        handle_factory: HandleFactory,
        preferred_models: Sequence[str],
        fallback_model: str | None = None,
        cache: ModelCache | None = None,
        timeout_seconds: float = 30.0,
        probe_prompt: str = "Hello",
        max_consecutive_failures: int = 3,
    ) -> None:
        """
        Initialize gateway.

        Args:
            handle_factory: Builds a ModelHandle for a model identifier
            preferred_models: Candidate model identifiers, most preferred first
            fallback_model: Identifier tried once after every candidate failed
            cache: Shared model cell (a private one is created when omitted)
            timeout_seconds: Upper bound for each probe and call
            probe_prompt: Trivial prompt used to check a candidate responds
            max_consecutive_failures: Failed generation calls on the cached
                model before the cache is dropped
        """
        self._handle_factory = handle_factory
        self._preferred_models = list(preferred_models)
        self._fallback_model = fallback_model
        self._cache = cache if cache is not None else ModelCache()
        self._timeout = timeout_seconds
        self._probe_prompt = probe_prompt
        self._max_failures = max_consecutive_failures
        self._failures = 0
        self._failures_lock = threading.Lock()
        self.last_probe_outcomes: list[ProbeOutcome] = []

    @classmethod
    def from_settings(
        cls,
        settings: ProviderSettings,
        handle_factory: HandleFactory,
        cache: ModelCache | None = None,
    ) -> "ModelGateway":
        """Build a gateway from provider settings."""
        return cls(
            handle_factory=handle_factory,
            preferred_models=settings.preferred_models,
            fallback_model=settings.fallback_model,
            cache=cache,
            timeout_seconds=settings.request_timeout_seconds,
            probe_prompt=settings.probe_prompt,
            max_consecutive_failures=settings.max_consecutive_failures,
        )

    @property
    def current_model(self) -> str | None:
        """Identifier of the cached model, if any."""
        entry = self._cache.get()
        return entry[1] if entry else None

    async def resolve(self) -> tuple[ModelHandle, str]:
        """
        Return a working model, probing candidates when none is cached.

        Returns:
            tuple[ModelHandle, str]: Handle and its model identifier

        Raises:
            ProviderUnavailable: When every candidate and the fallback fail
        """
        cached = self._cache.get()
        if cached is not None:
            logger.debug(f"{__name__}:resolve - Using cached model: {cached[1]}")
            return cached

        logger.info(f"{__name__}:resolve - Searching for best available model")
        outcomes: list[ProbeOutcome] = []
        candidates = list(self._preferred_models)
        if self._fallback_model:
            candidates.append(self._fallback_model)

        for position, model_id in enumerate(candidates):
            if position == len(self._preferred_models):
                logger.warning(f"{__name__}:resolve - Trying fallback model {model_id}")
            outcome = await self._probe(model_id)
            outcomes.append(outcome)
            if outcome.ok:
                self.last_probe_outcomes = outcomes
                handle, winner = self._cache.set_if_empty(outcome.handle, model_id)
                if winner != model_id:
                    logger.info(
                        f"{__name__}:resolve - {model_id} responded but {winner} "
                        f"was cached first, keeping {winner}"
                    )
                else:
                    logger.info(f"{__name__}:resolve - Model {model_id} is available and working")
                return handle, winner

        self.last_probe_outcomes = outcomes
        last_error = outcomes[-1].error if outcomes else None
        logger.error(f"{__name__}:resolve - No available models after {len(outcomes)} probes")
        raise ProviderUnavailable(
            "No available models found. Check the API key and network connection.",
            last_error=last_error,
            details={"tried": [outcome.model_id for outcome in outcomes]},
        )

    async def generate(self, prompt: str) -> str:
        """
        Generate text with the resolved model.

        Raises:
            ProviderUnavailable: When no model can be resolved
            Exception: Provider or timeout errors from the call itself
        """
        handle, model_id = await self.resolve()
        try:
            text = await asyncio.wait_for(handle.generate(prompt), timeout=self._timeout)
        except Exception:
            self._record_failure(model_id)
            raise
        self._record_success()
        return text

    async def embed(self, text: str) -> list[float]:
        """
        Embed text with the resolved model.

        Embedding failures do not count towards the eviction threshold.

        Raises:
            ProviderUnavailable: When no model can be resolved
            Exception: Provider or timeout errors from the call itself
        """
        handle, model_id = await self.resolve()
        try:
            vector = await asyncio.wait_for(handle.embed(text), timeout=self._timeout)
        except Exception as e:
            logger.debug(f"{__name__}:embed - Embedding failed on {model_id}: {type(e).__name__}")
            raise
        return list(vector)

    def reset(self) -> None:
        """Forget the cached model so the next call re-probes candidates."""
        if self._cache.clear():
            logger.warning(f"{__name__}:reset - Cached model dropped by operator")
        with self._failures_lock:
            self._failures = 0

    async def _probe(self, model_id: str) -> ProbeOutcome:
        """Check that a candidate answers a trivial prompt in time."""
        logger.info(f"{__name__}:_probe - Testing model: {model_id}")
        try:
            handle = self._handle_factory(model_id)
            await asyncio.wait_for(handle.generate(self._probe_prompt), timeout=self._timeout)
        except Exception as e:
            logger.warning(
                f"{__name__}:_probe - Model {model_id} not available: {type(e).__name__}: {e}"
            )
            return ProbeOutcome(model_id=model_id, error=e)
        return ProbeOutcome(model_id=model_id, handle=handle)

    def _record_failure(self, model_id: str) -> None:
        with self._failures_lock:
            self._failures += 1
            exhausted = self._failures >= self._max_failures
            if exhausted:
                self._failures = 0
        if exhausted and self._cache.clear(model_id):
            logger.warning(
                f"{__name__}:_record_failure - Model {model_id} failed "
                f"{self._max_failures} calls in a row, dropping it from cache"
            )

    def _record_success(self) -> None:
        with self._failures_lock:
            self._failures = 0
