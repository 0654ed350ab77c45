"""In-memory vector store.

Exact cosine similarity over a dict of points. Used for tests and for
running the engine without an external database.
"""

import threading

from loguru import logger

from ...entities.point import PayloadFilter, ScoredPoint, VectorPoint
from ...errors import CollectionNotFoundError, VectorStoreError
from ...utils.similarity import cosine_similarity
from ..base import BaseVectorStore


class _Collection:
    def __init__(self, vector_size: int):
        self.vector_size = vector_size
        self.points: dict[str, VectorPoint] = {}


class InMemoryVectorStore(BaseVectorStore):
    """
    A simple in-memory vector store.

    Collections and points live in process memory and vanish on restart.
    A single lock serialises every operation.
    """

    def __init__(self):
        self._collections: dict[str, _Collection] = {}
        self._lock = threading.RLock()

    def _get(self, name: str) -> _Collection:
        collection = self._collections.get(name)
        if collection is None:
            raise CollectionNotFoundError(name)
        return collection

    def collection_exists(self, name: str) -> bool:
        with self._lock:
            return name in self._collections

    def ensure_collection(self, name: str, vector_size: int) -> None:
        with self._lock:
            existing = self._collections.get(name)
            if existing is not None and existing.vector_size == vector_size:
                return
            if existing is not None:
                logger.warning(
                    f"Collection '{name}' has vector size {existing.vector_size}, "
                    f"expected {vector_size}; recreating it"
                )
            else:
                logger.info(f"Creating collection '{name}' (vector size {vector_size})")
            self._collections[name] = _Collection(vector_size)

    def delete_collection(self, name: str) -> None:
        with self._lock:
            self._collections.pop(name, None)

    def upsert(self, name: str, points: list[VectorPoint]) -> None:
        with self._lock:
            collection = self._get(name)
            for point in points:
                if point.vector is None or len(point.vector) != collection.vector_size:
                    raise VectorStoreError(
                        f"Point {point.id} has wrong vector size for collection '{name}'",
                        details={
                            "expected": collection.vector_size,
                            "received": len(point.vector) if point.vector else 0,
                        },
                    )
            for point in points:
                collection.points[point.id] = point.model_copy(deep=True)

    def query(
        self,
        name: str,
        vector: list[float],
        limit: int,
        filter: PayloadFilter | None = None,
        score_threshold: float | None = None,
    ) -> list[ScoredPoint]:
        with self._lock:
            collection = self._get(name)
            if len(vector) != collection.vector_size:
                raise VectorStoreError(
                    f"Query vector has wrong size for collection '{name}'",
                    details={"expected": collection.vector_size, "received": len(vector)},
                )
            candidates = [
                p for p in collection.points.values()
                if filter is None or filter.matches(p.payload)
            ]

            scored = []
            for point in candidates:
                score = cosine_similarity(vector, point.vector)
                if score_threshold is not None and score < score_threshold:
                    continue
                scored.append(ScoredPoint(id=point.id, score=score, payload=dict(point.payload)))

        scored.sort(key=lambda p: (-p.score, p.id))
        return scored[:limit]

    def query_ids_by_filter(self, name: str, filter: PayloadFilter) -> list[str]:
        with self._lock:
            collection = self._get(name)
            return [pid for pid, p in collection.points.items() if filter.matches(p.payload)]

    def scroll(
        self, name: str, filter: PayloadFilter | None = None, limit: int | None = None
    ) -> list[VectorPoint]:
        with self._lock:
            collection = self._get(name)
            matched = [
                VectorPoint(id=p.id, payload=dict(p.payload))
                for p in collection.points.values()
                if filter is None or filter.matches(p.payload)
            ]
        return matched[:limit] if limit is not None else matched

    def retrieve(self, name: str, ids: list[str]) -> list[VectorPoint]:
        with self._lock:
            collection = self._get(name)
            return [
                VectorPoint(id=pid, payload=dict(collection.points[pid].payload))
                for pid in ids
                if pid in collection.points
            ]

    def delete_points(self, name: str, ids: list[str]) -> None:
        with self._lock:
            collection = self._get(name)
            for pid in ids:
                collection.points.pop(pid, None)

    def health_check(self) -> bool:
        return True

    def count(self, name: str) -> int:
        """Number of points in the collection (0 if missing)."""
        with self._lock:
            collection = self._collections.get(name)
            return len(collection.points) if collection else 0
