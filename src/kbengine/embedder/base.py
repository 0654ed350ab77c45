"""Base embedder interface."""

from abc import ABC, abstractmethod
from typing import Any


class BaseEmbedder(ABC):
    """Abstract base class for embedding generation.

    Embedders convert text strings into fixed-size dense vectors. The same
    embedder must be used for ingestion and search so that query vectors and
    stored vectors live in the same space.
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors (same order as input)

        Raises:
            ValueError: If texts is empty
            EmbeddingError: If the provider fails
        """
        pass

    def embed_one(self, text: str) -> list[float]:
        """Generate the embedding of a single text."""
        return self.embed([text])[0]

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimension.

        Returns:
            Size of embedding vectors produced by this embedder
        """
        pass

    def is_available(self) -> bool:
        """Whether the embedder can currently serve requests."""
        return True

    def status(self) -> dict[str, Any]:
        """Describe the embedder for health reporting."""
        return {
            "provider": type(self).__name__,
            "available": self.is_available(),
            "dimension": self.dimension,
        }
