"""Read-only lookups of stored chunks."""

from typing import Any

from loguru import logger
from pydantic import ValidationError

from ..entities.chunk import KnowledgeChunk
from ..entities.operations import GetByUriResponse, GetChunkResponse
from ..entities.point import PayloadFilter
from ..errors import CollectionNotFoundError, VectorStoreError
from ..observability import trace_span
from .base import BasePipeline, require_text


def _to_chunk(point_id: str, payload: dict[str, Any]) -> KnowledgeChunk:
    try:
        return KnowledgeChunk.from_payload(point_id, payload)
    except ValidationError as e:
        raise VectorStoreError(
            f"Stored point {point_id} is not a valid chunk",
            details={"id": point_id},
            original_error=e,
        ) from e


class UriLookupPipeline(BasePipeline):
    """Returns every chunk of one document, ordered by ``chunk_index``."""

    @trace_span("knowledge.get_by_uri", attributes={"component": "lookup"})
    async def run(self, uri: str) -> GetByUriResponse:
        require_text(uri, "uri", "getByUri", "Provide the URI of the document to retrieve chunks for")

        try:
            points = await self._call(
                self.store.scroll,
                self.collection_name,
                PayloadFilter.match(uri=uri),
                None,
                context="Chunk retrieval",
            )
        except CollectionNotFoundError:
            points = []

        chunks = sorted(
            (_to_chunk(point.id, point.payload) for point in points),
            key=lambda chunk: chunk.chunk_index,
        )
        logger.info(f"Retrieved {len(chunks)} chunks for {uri}")

        return GetByUriResponse(
            uri=uri,
            chunks=chunks,
            total_chunks=len(chunks),
            message=(
                f"Retrieved {len(chunks)} chunks for URI" if chunks else "No chunks found for URI"
            ),
        )


class ChunkLookupPipeline(BasePipeline):
    """Returns one chunk by id, or ``None`` when it does not exist."""

    @trace_span("knowledge.get_chunk", attributes={"component": "lookup"})
    async def run(self, chunk_id: str) -> GetChunkResponse:
        require_text(chunk_id, "id", "getChunk", "Provide the id of the chunk to retrieve")

        try:
            points = await self._call(
                self.store.retrieve, self.collection_name, [chunk_id], context="Chunk retrieval"
            )
        except CollectionNotFoundError:
            points = []

        chunk = _to_chunk(points[0].id, points[0].payload) if points else None
        return GetChunkResponse(
            chunk=chunk,
            message="Retrieved chunk" if chunk else "Chunk not found",
        )
