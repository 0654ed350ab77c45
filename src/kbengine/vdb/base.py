"""Base vector store interface."""

from abc import ABC, abstractmethod

from ..entities.point import PayloadFilter, ScoredPoint, VectorPoint


class BaseVectorStore(ABC):
    """Abstract base class for vector database implementations.

    A store holds named collections of points (id, vector, payload). Reads
    against a collection that was never created raise
    ``CollectionNotFoundError``; writes require ``ensure_collection`` first.
    Implementations are called from worker threads and must be thread-safe.
    """

    @abstractmethod
    def collection_exists(self, name: str) -> bool:
        """Whether the named collection exists."""
        pass

    @abstractmethod
    def ensure_collection(self, name: str, vector_size: int) -> None:
        """Create the collection if missing (idempotent, concurrency-safe).

        An existing collection sized for a different vector length is dropped
        and recreated.
        """
        pass

    @abstractmethod
    def delete_collection(self, name: str) -> None:
        """Drop the collection and all its points. Missing collections are ignored."""
        pass

    @abstractmethod
    def upsert(self, name: str, points: list[VectorPoint]) -> None:
        """Insert or overwrite points by id."""
        pass

    @abstractmethod
    def query(
        self,
        name: str,
        vector: list[float],
        limit: int,
        filter: PayloadFilter | None = None,
        score_threshold: float | None = None,
    ) -> list[ScoredPoint]:
        """
        Similarity search.

        Args:
            name: Collection name
            vector: Query vector
            limit: Maximum number of points
            filter: Exact-match payload conditions
            score_threshold: Minimum cosine similarity (inclusive)

        Returns:
            Points ordered by descending score
        """
        pass

    @abstractmethod
    def query_ids_by_filter(self, name: str, filter: PayloadFilter) -> list[str]:
        """Ids of every point whose payload matches the filter."""
        pass

    @abstractmethod
    def scroll(
        self, name: str, filter: PayloadFilter | None = None, limit: int | None = None
    ) -> list[VectorPoint]:
        """Points (without vectors) matching the filter, in unspecified order."""
        pass

    @abstractmethod
    def retrieve(self, name: str, ids: list[str]) -> list[VectorPoint]:
        """Points (without vectors) with the given ids; unknown ids are skipped."""
        pass

    @abstractmethod
    def delete_points(self, name: str, ids: list[str]) -> None:
        """Delete points by id."""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Whether the backing service answers."""
        pass
