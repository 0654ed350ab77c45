"""
Chroma vector store implementation.

Chroma metadata values must be flat primitives, so payload values that are
dicts or lists (the caller's ``metadata`` map) are stored JSON-encoded and
their keys listed under ``_json_keys`` for decoding on read. ``None`` values
are dropped. Chunk text is stored as the Chroma document.
"""

import json
import threading
from typing import Any

import chromadb
from chromadb.api import ClientAPI
from chromadb.errors import NotFoundError as ChromaNotFoundError
from loguru import logger

from ...entities.point import PayloadFilter, ScoredPoint, VectorPoint
from ...errors import CollectionNotFoundError
from ..base import BaseVectorStore

_CONTENT_KEY = "content"
_JSON_KEYS = "_json_keys"
_DIMENSION_KEY = "dimension"


class ChromaVectorStore(BaseVectorStore):
    """
    Chroma Vector Store Implementation.

    Uses a local ``PersistentClient`` by default, or an ``HttpClient`` when a
    host is configured. Collections use the cosine space, so
    ``score = 1 - distance``.
    """

    def __init__(
        self,
        persist_directory: str = "storage/chroma_db",
        host: str | None = None,
        port: int = 8000,
        client: ClientAPI | None = None,
    ):
        if client is not None:
            self._client = client
        elif host:
            self._client = chromadb.HttpClient(host=host, port=port)
        else:
            self._client = chromadb.PersistentClient(path=persist_directory)
        self.persist_directory = persist_directory
        self.host = host
        self._lock = threading.Lock()

    def _get(self, name: str):
        try:
            return self._client.get_collection(name=name)
        except (ChromaNotFoundError, ValueError) as e:
            raise CollectionNotFoundError(name, original_error=e) from e

    def collection_exists(self, name: str) -> bool:
        try:
            self._get(name)
        except CollectionNotFoundError:
            return False
        return True

    def ensure_collection(self, name: str, vector_size: int) -> None:
        with self._lock:
            try:
                collection = self._get(name)
            except CollectionNotFoundError:
                collection = None

            if collection is not None:
                existing = (collection.metadata or {}).get(_DIMENSION_KEY)
                if existing is None or existing == vector_size:
                    return
                logger.warning(
                    f"Collection '{name}' has vector size {existing}, "
                    f"expected {vector_size}; recreating it"
                )
                self._client.delete_collection(name=name)
            else:
                logger.info(f"Creating collection '{name}' (vector size {vector_size})")

            # We enforce cosine distance for consistency
            self._client.get_or_create_collection(
                name=name,
                metadata={"hnsw:space": "cosine", _DIMENSION_KEY: vector_size},
            )

    def delete_collection(self, name: str) -> None:
        with self._lock:
            try:
                self._client.delete_collection(name=name)
            except (ChromaNotFoundError, ValueError):
                logger.debug(f"Collection '{name}' already absent")

    def upsert(self, name: str, points: list[VectorPoint]) -> None:
        if not points:
            return
        collection = self._get(name)
        collection.upsert(
            ids=[p.id for p in points],
            embeddings=[p.vector for p in points],
            documents=[p.payload.get(_CONTENT_KEY, "") for p in points],
            metadatas=[self._to_metadata(p.payload) for p in points],
        )

    def query(
        self,
        name: str,
        vector: list[float],
        limit: int,
        filter: PayloadFilter | None = None,
        score_threshold: float | None = None,
    ) -> list[ScoredPoint]:
        collection = self._get(name)
        results = collection.query(
            query_embeddings=[vector],
            n_results=limit,
            where=self._to_where(filter),
            include=["documents", "metadatas", "distances"],
        )

        if not results["ids"] or not results["ids"][0]:
            return []

        ids = results["ids"][0]
        docs = results["documents"][0]
        metas = results["metadatas"][0]
        dists = results["distances"][0]

        points = []
        for i, point_id in enumerate(ids):
            # Cosine distance is in [0, 2]
            score = 1.0 - dists[i]
            if score_threshold is not None and score < score_threshold:
                continue
            points.append(
                ScoredPoint(id=point_id, score=score, payload=self._to_payload(metas[i], docs[i]))
            )

        points.sort(key=lambda p: (-p.score, p.id))
        return points

    def query_ids_by_filter(self, name: str, filter: PayloadFilter) -> list[str]:
        collection = self._get(name)
        result = collection.get(where=self._to_where(filter), include=[])
        return list(result["ids"])

    def scroll(
        self, name: str, filter: PayloadFilter | None = None, limit: int | None = None
    ) -> list[VectorPoint]:
        collection = self._get(name)
        result = collection.get(
            where=self._to_where(filter),
            limit=limit,
            include=["documents", "metadatas"],
        )
        return self._to_points(result)

    def retrieve(self, name: str, ids: list[str]) -> list[VectorPoint]:
        collection = self._get(name)
        if not ids:
            return []
        result = collection.get(ids=ids, include=["documents", "metadatas"])
        return self._to_points(result)

    def delete_points(self, name: str, ids: list[str]) -> None:
        if not ids:
            return
        collection = self._get(name)
        collection.delete(ids=ids)

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
        except Exception as e:
            logger.warning(f"Chroma health check failed: {e}")
            return False
        return True

    @staticmethod
    def _to_where(filter: PayloadFilter | None) -> dict[str, Any] | None:
        if filter is None or not filter.must:
            return None
        conditions = [{key: value} for key, value in filter.must.items()]
        if len(conditions) == 1:
            return conditions[0]
        return {"$and": conditions}

    @staticmethod
    def _to_metadata(payload: dict[str, Any]) -> dict[str, Any]:
        meta: dict[str, Any] = {}
        json_keys = []
        for key, value in payload.items():
            if key == _CONTENT_KEY or value is None:
                continue
            if isinstance(value, (str, int, float, bool)):
                meta[key] = value
            else:
                meta[key] = json.dumps(value, default=str)
                json_keys.append(key)
        if json_keys:
            meta[_JSON_KEYS] = ",".join(json_keys)
        return meta

    @staticmethod
    def _to_payload(meta: dict[str, Any] | None, document: str | None) -> dict[str, Any]:
        meta = dict(meta or {})
        json_keys = meta.pop(_JSON_KEYS, "")
        for key in [k for k in json_keys.split(",") if k]:
            if key in meta:
                meta[key] = json.loads(meta[key])
        if document is not None:
            meta[_CONTENT_KEY] = document
        return meta

    def _to_points(self, result: dict[str, Any]) -> list[VectorPoint]:
        ids = result.get("ids") or []
        docs = result.get("documents") or [None] * len(ids)
        metas = result.get("metadatas") or [None] * len(ids)
        return [
            VectorPoint(id=point_id, payload=self._to_payload(metas[i], docs[i]))
            for i, point_id in enumerate(ids)
        ]
