"""Mock embedder for testing (no external API)."""

import hashlib
import math
import re

from loguru import logger

from ...errors import EmbeddingUnavailableError, InvalidRequestError
from ..base import BaseEmbedder

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


class MockEmbedder(BaseEmbedder):
    """Generates deterministic embeddings for testing.

    WARNING: This embedder is NOT suitable for production use.

    Each lowercase word token is hashed with SHA-256 into one of
    ``dimension`` buckets with a +1/-1 sign, then the vector is normalized.
    Texts sharing words therefore score a higher cosine similarity, and the
    output is stable across processes (unlike ``hash()``).

    Attributes:
        dimension: Embedding vector dimension
        available: Reported availability, to exercise unavailable paths
    """

    def __init__(self, dimension: int = 384, available: bool = True):
        """Initialize the mock embedder.

        Args:
            dimension: Size of embedding vectors
            available: Value returned by ``is_available``
        """
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        self._dimension = dimension
        self.available = available
        logger.warning(
            "Using MockEmbedder - NOT for production use! "
            "Replace with a real embedder for actual applications."
        )

    def is_available(self) -> bool:
        return self.available

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate mock embeddings for texts.

        Raises:
            ValueError: If texts is empty
            InvalidRequestError: If a text is empty after trimming
            EmbeddingUnavailableError: If constructed with ``available=False``
        """
        if not texts:
            raise ValueError("texts cannot be empty")
        if not self.available:
            raise EmbeddingUnavailableError(details={"provider": "mock"})

        logger.debug(f"Generating {len(texts)} mock embeddings")
        return [self._vectorize(text) for text in texts]

    def _vectorize(self, text: str) -> list[float]:
        text = text.strip()
        if not text:
            raise InvalidRequestError("Cannot embed empty text")

        # Texts without word characters hash as a single token
        tokens = _TOKEN_RE.findall(text.lower()) or [text]

        vec = [0.0] * self._dimension
        for token in tokens:
            digest = hashlib.sha256(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:4], "big") % self._dimension
            sign = 1.0 if digest[4] & 1 else -1.0
            vec[bucket] += sign

        magnitude = math.sqrt(sum(x * x for x in vec))
        if magnitude == 0:
            # Colliding tokens cancelled out; fall back to the first bucket
            vec[0] = 1.0
            return vec
        return [x / magnitude for x in vec]

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension
