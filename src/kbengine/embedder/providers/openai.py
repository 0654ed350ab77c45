"""
OpenAI-compatible embedder.

Works with any API that follows the OpenAI embeddings format, including
OpenAI, Azure OpenAI, and local models served via compatible APIs
(e.g. LocalAI, Ollama with its OpenAI compatibility layer).

httpx is used directly instead of the openai SDK: pipelines call embedders
from worker threads, so a plain synchronous client keeps timeouts and error
classification in one place.
"""

from typing import Any

import httpx
from loguru import logger

from ...errors import (
    ConnectionError,
    EmbeddingError,
    EmbeddingUnavailableError,
    InvalidRequestError,
    OperationTimeoutError,
    classify_http_error,
    is_retryable,
)
from ..base import BaseEmbedder

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "text-embedding-3-small"
DEFAULT_DIMENSIONS = 1536


class OpenAIEmbedder(BaseEmbedder):
    """
    OpenAI-compatible Embedder implementation.

    Attributes:
        base_url: The API base URL (e.g., "https://api.openai.com/v1")
        api_key: API authentication key; without one the embedder reports
            itself unavailable
        model: Model identifier (e.g., "text-embedding-3-small")
        batch_size: Maximum texts per API call (default: 100)
        timeout: HTTP timeout per call in seconds
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        dimensions: int = DEFAULT_DIMENSIONS,
        batch_size: int = 100,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        """
        Initialize the OpenAI-compatible embedder.

        Args:
            api_key: Authentication key for the API
            base_url: API endpoint base URL (trailing slash will be stripped)
            model: Model name to use for embeddings
            dimensions: Expected vector size, used to size the collection
                before the first call
            batch_size: Maximum texts per API call
            timeout: HTTP timeout in seconds
            client: Pre-built httpx client (tests inject one)
        """
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.model = model
        self.batch_size = batch_size
        self.timeout = timeout
        self.client = client or httpx.Client(timeout=timeout)
        self._dimension = dimensions

    def is_available(self) -> bool:
        return bool(self.api_key)

    def status(self) -> dict[str, Any]:
        return {
            "provider": "openai",
            "model": self.model,
            "available": self.is_available(),
            "dimension": self._dimension,
        }

    def embed(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for a list of texts.

        Inputs are trimmed; large lists are sent in batches of ``batch_size``.

        Args:
            texts: List of strings to embed

        Returns:
            List of embedding vectors, one per input text

        Raises:
            ValueError: If texts is empty
            InvalidRequestError: If a text is empty after trimming
            EmbeddingUnavailableError: If no API key is configured
            RetryableError: Transient HTTP or transport failure
            EmbeddingError: The provider rejected the request (non-retryable HTTP status)
        """
        if not texts:
            raise ValueError("texts cannot be empty")
        if not self.is_available():
            raise EmbeddingUnavailableError(
                "Embedding service not available - no API key configured",
                details={"provider": "openai"},
            )

        cleaned = [text.strip() for text in texts]
        if any(not text for text in cleaned):
            raise InvalidRequestError(
                "Cannot embed empty text",
                hint="Provide non-blank text to embed",
            )

        if len(cleaned) <= self.batch_size:
            return self._embed_single_batch(cleaned)

        all_embeddings = []
        total_batches = (len(cleaned) + self.batch_size - 1) // self.batch_size
        logger.info(
            f"Processing {len(cleaned)} texts in {total_batches} batches "
            f"(batch_size={self.batch_size})"
        )

        for i in range(0, len(cleaned), self.batch_size):
            batch = cleaned[i:i + self.batch_size]
            logger.debug(
                f"Embedding batch {i // self.batch_size + 1}/{total_batches} ({len(batch)} texts)"
            )
            all_embeddings.extend(self._embed_single_batch(batch))

        return all_embeddings

    def _embed_single_batch(self, texts: list[str]) -> list[list[float]]:
        url = f"{self.base_url}/embeddings"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {"input": texts, "model": self.model}

        try:
            resp = self.client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise OperationTimeoutError(
                f"Embedding request timed out after {self.timeout}s",
                timeout=self.timeout,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            raise ConnectionError(
                f"Failed to reach embedding service at {self.base_url}",
                original_error=e,
            ) from e

        if resp.status_code >= 400:
            logger.error(f"Embedding failed: HTTP {resp.status_code} {resp.text[:200]}")
            classified = classify_http_error(resp.status_code, resp.text, dict(resp.headers))
            if is_retryable(classified):
                raise classified
            # A rejected embedding call is a provider failure, not a caller validation error
            raise EmbeddingError(
                f"Embedding request rejected: HTTP {resp.status_code}",
                details={"status_code": resp.status_code, "provider": "openai"},
                original_error=classified,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise EmbeddingError("Embedding service returned invalid JSON", original_error=e) from e

        # Sort by index to ensure correct order
        results = sorted(data.get("data", []), key=lambda item: item.get("index", 0))
        vectors = [item["embedding"] for item in results]

        if len(vectors) != len(texts):
            raise EmbeddingError(
                "Embedding service returned an unexpected number of vectors",
                details={"expected": len(texts), "received": len(vectors)},
            )

        if vectors and len(vectors[0]) != self._dimension:
            logger.warning(
                f"Model {self.model} returned {len(vectors[0])}-dim vectors, "
                f"expected {self._dimension}; using the returned size"
            )
            self._dimension = len(vectors[0])

        return vectors

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension

    def close(self) -> None:
        self.client.close()
