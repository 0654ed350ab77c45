"""Base chunker interface."""

from abc import ABC, abstractmethod


class BaseChunker(ABC):
    """Abstract base class for text chunking.

    Chunkers split one document's text into bounded pieces suitable for
    embedding and retrieval. Implementations must be pure and deterministic:
    identical text and configuration always yield the identical sequence,
    because chunk ids are derived from chunk positions.
    """

    chunk_size: int

    @abstractmethod
    def split_text(self, text: str) -> list[str]:
        """Split text into chunks.

        Args:
            text: Full document text

        Returns:
            Chunks in document order; empty for empty or whitespace-only text
        """
        pass
