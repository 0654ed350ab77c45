"""Ingestion pipeline: chunk, embed and upsert one document."""

import asyncio
from typing import Any

from loguru import logger

from ..chunker.base import BaseChunker
from ..config.models import MAX_DOCUMENT_SIZE
from ..embedder.base import BaseEmbedder
from ..entities.chunk import KnowledgeChunk, utc_now_iso
from ..entities.operations import IngestResponse
from ..entities.point import VectorPoint
from ..errors import EmbeddingError, EmbeddingUnavailableError, InvalidRequestError
from ..identity import checksum_of, chunk_id_for
from ..observability import trace_span
from ..utils.performance import timer
from ..vdb.base import BaseVectorStore
from .base import BasePipeline, require_text

EMPTY_CONTENT_MESSAGE = "Empty or whitespace-only content - no chunks created"


class IngestionPipeline(BasePipeline):
    """
    Turns a document into stored chunks.

    Steps:
    1. Validate uri, content, metadata and the size ceiling
    2. Split into chunks (pure, deterministic)
    3. Embed every chunk, ``embed_concurrency`` at a time
    4. Ensure the collection exists, sized to the embedder
    5. Upsert all points in one call

    Nothing is written unless every chunk was embedded. Chunk ids are derived
    from ``(uri, chunk_index)``, so re-ingesting the same content overwrites
    the same points.
    """

    def __init__(
        self,
        chunker: BaseChunker,
        embedder: BaseEmbedder,
        store: BaseVectorStore,
        collection_name: str = "knowledge-base",
        max_document_size: int = MAX_DOCUMENT_SIZE,
        embed_concurrency: int = 4,
        request_timeout: float = 30.0,
    ):
        super().__init__(store, collection_name, request_timeout)
        self.chunker = chunker
        self.embedder = embedder
        self.max_document_size = max_document_size
        self.embed_concurrency = embed_concurrency

    @trace_span("knowledge.ingest", attributes={"component": "ingestion"})
    async def run(
        self,
        uri: str,
        content: str,
        metadata: dict[str, Any] | None = None,
    ) -> IngestResponse:
        """
        Ingest one document.

        Args:
            uri: Absolute, unique locator of the document
            content: Full document text (at most ``max_document_size`` UTF-8 bytes)
            metadata: Caller context stored on every chunk

        Returns:
            IngestResponse with the chunk ids in chunk order

        Raises:
            InvalidRequestError: Missing/oversized input (before any external call)
            EmbeddingUnavailableError: Embedder not configured
            EmbeddingError: One or more chunks failed to embed; nothing written
            VectorStoreError / RetryableError: Store failure
        """
        self._validate(uri, content, metadata)

        if not self.embedder.is_available():
            raise EmbeddingUnavailableError(
                details={"operation": "ingest", "embedder": self.embedder.status()}
            )

        texts = self.chunker.split_text(content)
        if not texts:
            logger.info(f"Empty content - no chunks created for {uri}")
            return IngestResponse(
                chunks_created=0,
                chunk_ids=[],
                uri=uri,
                message=EMPTY_CONTENT_MESSAGE,
            )

        logger.info(
            f"Ingesting {uri}: {len(content.encode('utf-8'))} bytes, {len(texts)} chunks"
        )

        with timer(f"Embedding {len(texts)} chunks"):
            vectors = await self._embed_all(texts)

        await self._call(
            self.store.ensure_collection,
            self.collection_name,
            self.embedder.dimension,
            context="Collection initialization",
        )

        # One timestamp for the whole call
        ingested_at = utc_now_iso()
        chunks = [
            KnowledgeChunk(
                id=chunk_id_for(uri, index),
                content=text,
                uri=uri,
                checksum=checksum_of(text),
                chunk_index=index,
                total_chunks=len(texts),
                ingested_at=ingested_at,
                metadata=metadata or {},
            )
            for index, text in enumerate(texts)
        ]
        points = [
            VectorPoint(id=chunk.id, vector=vector, payload=chunk.to_payload())
            for chunk, vector in zip(chunks, vectors)
        ]

        await self._call(
            self.store.upsert, self.collection_name, points, context="Chunk upsert"
        )

        chunk_ids = [chunk.id for chunk in chunks]
        logger.info(f"Document ingestion completed: {uri} ({len(chunk_ids)} chunks)")

        return IngestResponse(
            chunks_created=len(chunk_ids),
            chunk_ids=chunk_ids,
            uri=uri,
            message=f"Successfully ingested document into {len(chunk_ids)} chunks",
        )

    def _validate(self, uri: Any, content: Any, metadata: Any) -> None:
        require_text(
            content,
            "content",
            "ingest",
            "Provide the document content to ingest",
        )
        require_text(
            uri,
            "uri",
            "ingest",
            "Provide the full URI identifying the document (e.g., git://org/repo/docs/guide.md)",
        )
        if metadata is not None and not isinstance(metadata, dict):
            raise InvalidRequestError(
                "metadata must be an object",
                hint="Pass metadata as a key/value map",
                details={"operation": "ingest", "field": "metadata"},
            )

        size = len(content.encode("utf-8"))
        if size > self.max_document_size:
            raise InvalidRequestError(
                "Document exceeds maximum size limit",
                hint="Split the document into smaller parts before ingesting",
                details={
                    "operation": "ingest",
                    "maxSize": self.max_document_size,
                    "actualSize": size,
                },
            )

    async def _embed_all(self, texts: list[str]) -> list[list[float]]:
        """Embed every text concurrently; fail if any single embedding fails."""
        semaphore = asyncio.Semaphore(self.embed_concurrency)

        async def embed(index: int, text: str) -> list[float]:
            async with semaphore:
                return await self._call(
                    self.embedder.embed_one,
                    text,
                    context=f"Embedding chunk {index}",
                    error_cls=EmbeddingError,
                )

        results = await asyncio.gather(
            *(embed(i, text) for i, text in enumerate(texts)),
            return_exceptions=True,
        )

        failed = [i for i, result in enumerate(results) if isinstance(result, BaseException)]
        if failed:
            first = results[failed[0]]
            if not isinstance(first, Exception):
                raise first
            logger.error(f"Failed to embed {len(failed)} of {len(texts)} chunks: {first}")
            raise EmbeddingError(
                f"Failed to embed {len(failed)} of {len(texts)} chunks",
                details={"operation": "ingest", "failed_chunks": failed},
                original_error=first,
            ) from first

        return results
