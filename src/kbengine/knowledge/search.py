"""Search pipeline: embed a query and return the closest chunks."""

import math

from loguru import logger

from ..embedder.base import BaseEmbedder
from ..entities.operations import SearchResponse, SearchResultItem
from ..entities.point import PayloadFilter, ScoredPoint
from ..errors import (
    CollectionNotFoundError,
    EmbeddingError,
    EmbeddingUnavailableError,
    InvalidRequestError,
)
from ..observability import trace_span
from ..vdb.base import BaseVectorStore
from .base import BasePipeline
from .ranking import BaseRanker, DenseScoreRanker

NO_MATCHES_MESSAGE = "No matching documents found"


class SearchPipeline(BasePipeline):
    """
    Semantic search over the knowledge collection.

    The query is embedded with the same embedder used at ingestion, matched
    against stored vectors (optionally restricted to one uri), then ranked.
    Scores are cosine similarities. An empty or missing collection is a
    normal, empty result.
    """

    def __init__(
        self,
        embedder: BaseEmbedder,
        store: BaseVectorStore,
        collection_name: str = "knowledge-base",
        default_limit: int = 10,
        default_score_threshold: float = 0.3,
        request_timeout: float = 30.0,
        ranker: BaseRanker | None = None,
    ):
        super().__init__(store, collection_name, request_timeout)
        self.embedder = embedder
        self.default_limit = default_limit
        self.default_score_threshold = default_score_threshold
        self.ranker = ranker or DenseScoreRanker()

    @trace_span("knowledge.search", attributes={"component": "search"})
    async def run(
        self,
        query: str,
        limit: int | None = None,
        score_threshold: float | None = None,
        uri_filter: str | None = None,
    ) -> SearchResponse:
        """
        Search the knowledge base.

        Args:
            query: Natural language query
            limit: Maximum results (defaults to ``default_limit``)
            score_threshold: Minimum similarity (defaults to ``default_score_threshold``)
            uri_filter: Only return chunks whose uri equals this value

        Raises:
            InvalidRequestError: Blank query or bad limit/threshold/filter
            EmbeddingUnavailableError: Embedder not configured
        """
        limit, threshold = self._validate(query, limit, score_threshold, uri_filter)

        if not self.embedder.is_available():
            raise EmbeddingUnavailableError(
                details={"operation": "search", "embedder": self.embedder.status()}
            )

        vector = await self._call(
            self.embedder.embed_one, query, context="Query embedding", error_cls=EmbeddingError
        )

        payload_filter = PayloadFilter.match(uri=uri_filter) if uri_filter is not None else None
        try:
            points = await self._call(
                self.store.query,
                self.collection_name,
                vector,
                limit,
                payload_filter,
                threshold,
                context="Similarity query",
            )
        except CollectionNotFoundError:
            logger.info(f"Collection '{self.collection_name}' not found - returning no results")
            points = []

        ranked = self.ranker.rank(points, limit=limit, score_threshold=threshold)
        items = [self._to_item(point) for point in ranked]

        logger.info(
            f"Search '{query[:50]}{'...' if len(query) > 50 else ''}' "
            f"returned {len(items)} chunks"
        )

        return SearchResponse(
            chunks=items,
            total_matches=len(items),
            query=query,
            message=f"Found {len(items)} matching chunks" if items else NO_MATCHES_MESSAGE,
        )

    def _validate(
        self,
        query: object,
        limit: object,
        score_threshold: object,
        uri_filter: object,
    ) -> tuple[int, float]:
        if not isinstance(query, str) or not query.strip():
            raise InvalidRequestError(
                "Missing required parameter: query",
                hint="Provide a natural language search query",
                details={"operation": "search", "field": "query"},
            )

        if limit is None:
            limit = self.default_limit
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise InvalidRequestError(
                "limit must be a positive integer",
                hint="Omit limit to use the default of 10",
                details={"operation": "search", "field": "limit"},
            )

        if score_threshold is None:
            score_threshold = self.default_score_threshold
        if (
            isinstance(score_threshold, bool)
            or not isinstance(score_threshold, (int, float))
            or not math.isfinite(score_threshold)
        ):
            raise InvalidRequestError(
                "scoreThreshold must be a finite number",
                hint="Use a similarity between 0 and 1",
                details={"operation": "search", "field": "scoreThreshold"},
            )

        if uri_filter is not None and (not isinstance(uri_filter, str) or not uri_filter):
            raise InvalidRequestError(
                "uriFilter must be a non-empty string",
                hint="Pass the exact uri of an ingested document",
                details={"operation": "search", "field": "uriFilter"},
            )

        return limit, float(score_threshold)

    @staticmethod
    def _to_item(point: ScoredPoint) -> SearchResultItem:
        payload = point.payload
        return SearchResultItem(
            id=point.id,
            content=payload.get("content", ""),
            score=point.score,
            uri=payload.get("uri", ""),
            metadata=payload.get("metadata") or {},
            chunk_index=payload.get("chunkIndex", 0),
            total_chunks=payload.get("totalChunks", 1),
        )
