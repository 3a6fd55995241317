"""Embedding orchestration: payload building, provider calls, fallback.

The orchestrator never raises. When the provider is missing, errors out,
or returns a vector of the wrong size, a deterministic keyword-seeded
vector is returned instead so that resubmitting the same resume always
produces the same query.
"""

import asyncio
import enum
import logging
from typing import Protocol

import numpy as np

from services import gemini_client
from services.gemini_client import ProviderError
from services.keyword_extractor import extract_key_terms

logger = logging.getLogger(__name__)

HEAD_FRACTION = 0.6  # share of max_chars kept from the start of long text
KEY_TERMS_IN_PAYLOAD = 20
ENHANCED_REPEAT = 3
DEFAULT_CONCURRENCY = 8  # provider calls in flight during batch embedding

# Linear congruential generator constants for the fallback vector
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


class EmbeddingMethod(str, enum.Enum):
    STANDARD = "standard"
    ENHANCED = "enhanced"
    SECTION_WEIGHTED = "sectionWeighted"


_METHODS: list[EmbeddingMethod] = list(EmbeddingMethod)


class EmbeddingProvider(Protocol):
    name: str

    async def embed(self, text: str) -> list[float]:
        """Return a dense vector or raise ProviderError."""
        ...


class GeminiEmbeddingProvider:
    name = "gemini"

    def __init__(self, client, model: str, dimension: int) -> None:
        self._client = client
        self._model = model
        self._dimension = dimension

    async def embed(self, text: str) -> list[float]:
        return await gemini_client.embed_text(self._client, text, self._model, self._dimension)


class SentenceTransformerProvider:
    """Local sentence-transformers model, loaded on first use."""

    name = "sbert"

    def __init__(self, model_name: str) -> None:
        self._model_name = model_name
        self._model = None

    def _get_model(self):
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer

                self._model = SentenceTransformer(self._model_name)
                logger.info("Loaded embedding model %s", self._model_name)
            except Exception as e:
                raise ProviderError(f"Could not load {self._model_name}: {e}") from e
        return self._model

    def _encode(self, text: str) -> list[float]:
        model = self._get_model()
        try:
            return model.encode(text, convert_to_numpy=True).tolist()
        except Exception as e:
            raise ProviderError(f"Encoding failed: {e}") from e

    async def embed(self, text: str) -> list[float]:
        return await asyncio.to_thread(self._encode, text)


def rolling_hash(text: str) -> int:
    """Java-style ``h = h*31 + ord(c)`` wrapped to a signed 32-bit int."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def fallback_embedding(text: str, dimension: int) -> list[float]:
    """Deterministic pseudo-random vector in [-1, 1] seeded from key terms."""
    seed = rolling_hash(" ".join(extract_key_terms(text)))
    vector: list[float] = []
    for _ in range(dimension):
        seed = (seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        vector.append(seed / LCG_MODULUS * 2 - 1)
    return vector


def truncate_text(text: str, max_chars: int) -> str:
    """Keep a head and a tail window when ``text`` exceeds ``max_chars``."""
    if len(text) <= max_chars:
        return text
    head = int(max_chars * HEAD_FRACTION)
    tail = max_chars - head
    return f"{text[:head]} ... {text[-tail:]}"


def l2_normalize(vector: list[float]) -> list[float]:
    arr = np.asarray(vector, dtype=float)
    norm = float(np.linalg.norm(arr))
    if norm == 0.0:
        logger.warning("Provider returned a zero vector; skipping normalisation")
        return arr.tolist()
    return (arr / norm).tolist()


def select_embedding_method(session_id: str | None) -> EmbeddingMethod:
    """Deterministically bucket a session into an embedding strategy."""
    if not session_id:
        return EmbeddingMethod.STANDARD
    suffix = session_id[-4:]
    return _METHODS[rolling_hash(suffix) % len(_METHODS)]


def build_payload(text: str, method: EmbeddingMethod = EmbeddingMethod.STANDARD) -> str:
    terms = extract_key_terms(text)[:KEY_TERMS_IN_PAYLOAD]
    if not terms:
        return text
    joined = " ".join(terms)
    if method is EmbeddingMethod.ENHANCED:
        joined = " ".join([joined] * ENHANCED_REPEAT)
    return f"{text} Key terms: {joined}"


class EmbeddingOrchestrator:
    def __init__(
        self,
        provider: EmbeddingProvider | None,
        dimension: int,
        max_chars: int = 8000,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        self.provider = provider
        self.dimension = dimension
        self.max_chars = max_chars
        self.concurrency = max(1, concurrency)

    @property
    def provider_name(self) -> str:
        return self.provider.name if self.provider is not None else "fallback"

    async def embed(
        self,
        text: str,
        method: EmbeddingMethod = EmbeddingMethod.STANDARD,
    ) -> list[float]:
        """Embed ``text``; falls back to the keyword vector on any failure."""
        truncated = truncate_text(text or "", self.max_chars)
        payload = build_payload(truncated, method)

        if self.provider is None:
            logger.debug("No embedding provider configured, using fallback")
            return fallback_embedding(truncated, self.dimension)

        try:
            vector = await self.provider.embed(payload)
        except Exception as e:
            logger.warning("Embedding provider %s failed, using fallback: %s", self.provider_name, e)
            return fallback_embedding(truncated, self.dimension)

        if len(vector) != self.dimension:
            logger.warning(
                "Provider %s returned %d dims, expected %d; using fallback",
                self.provider_name, len(vector), self.dimension,
            )
            return fallback_embedding(truncated, self.dimension)

        return l2_normalize(vector)

    async def embed_many(self, texts: list[str], method: EmbeddingMethod = EmbeddingMethod.STANDARD) -> list[list[float]]:
        """Embed a batch in order, with at most ``concurrency`` provider calls in flight."""
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _bounded(text: str) -> list[float]:
            async with semaphore:
                return await self.embed(text, method)

        return list(await asyncio.gather(*(_bounded(t) for t in texts)))
