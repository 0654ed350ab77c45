"""Deletion pipeline: remove every chunk of a document."""

from loguru import logger

from ..entities.operations import DeleteByUriResponse
from ..entities.point import PayloadFilter
from ..errors import CollectionNotFoundError
from ..observability import trace_span
from .base import BasePipeline, require_text


class DeletionPipeline(BasePipeline):
    """Deletes all points whose payload ``uri`` equals the given uri.

    Deleting an unknown uri, or from a collection that does not exist yet,
    succeeds with ``chunks_deleted == 0``.
    """

    @trace_span("knowledge.delete_by_uri", attributes={"component": "deletion"})
    async def run(self, uri: str) -> DeleteByUriResponse:
        require_text(uri, "uri", "deleteByUri", "Provide the URI of the document to delete")

        try:
            ids = await self._call(
                self.store.query_ids_by_filter,
                self.collection_name,
                PayloadFilter.match(uri=uri),
                context="Chunk lookup",
            )
        except CollectionNotFoundError:
            logger.info(f"Collection '{self.collection_name}' not found - nothing to delete")
            ids = []

        if ids:
            await self._call(
                self.store.delete_points, self.collection_name, ids, context="Chunk deletion"
            )

        logger.info(f"Deleted {len(ids)} chunks for {uri}")
        return DeleteByUriResponse(
            uri=uri,
            chunks_deleted=len(ids),
            message=f"Deleted {len(ids)} chunks for URI" if ids else "No chunks found for URI",
        )
