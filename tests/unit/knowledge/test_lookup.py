"""Tests for UriLookupPipeline and ChunkLookupPipeline."""

import pytest

from kbengine.entities import VectorPoint
from kbengine.errors import InvalidRequestError, VectorStoreError
from kbengine.identity import chunk_id_for
from kbengine.knowledge import ChunkLookupPipeline, IngestionPipeline, UriLookupPipeline

COLLECTION = "test-knowledge"
URI = "https://x/doc"


def stored_point(index, total=3):
    return VectorPoint(
        id=chunk_id_for(URI, index),
        payload={
            "content": f"chunk {index}",
            "uri": URI,
            "checksum": "c",
            "chunkIndex": index,
            "totalChunks": total,
            "ingestedAt": "2024-01-01T00:00:00+00:00",
            "metadata": {},
        },
    )


class TestUriLookup:

    @pytest.mark.asyncio
    async def test_returns_document_in_order(self, small_chunker, mock_embedder, in_memory_vector_store, sample_text):
        ingestion = IngestionPipeline(
            small_chunker, mock_embedder, in_memory_vector_store, collection_name=COLLECTION
        )
        ingested = await ingestion.run(URI, sample_text)
        lookup = UriLookupPipeline(in_memory_vector_store, collection_name=COLLECTION)

        response = await lookup.run(URI)

        assert [c.id for c in response.chunks] == ingested.chunk_ids
        assert response.total_chunks == ingested.chunks_created
        assert response.message == f"Retrieved {ingested.chunks_created} chunks for URI"

    @pytest.mark.asyncio
    async def test_sorts_store_results(self, mock_vector_store):
        mock_vector_store.scroll.return_value = [stored_point(2), stored_point(0), stored_point(1)]
        lookup = UriLookupPipeline(mock_vector_store, collection_name=COLLECTION)

        response = await lookup.run(URI)

        assert [c.chunk_index for c in response.chunks] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_unknown_uri(self, in_memory_vector_store):
        lookup = UriLookupPipeline(in_memory_vector_store, collection_name=COLLECTION)

        response = await lookup.run(URI)

        assert response.chunks == []
        assert response.total_chunks == 0
        assert response.message == "No chunks found for URI"

    @pytest.mark.asyncio
    async def test_missing_uri(self, in_memory_vector_store):
        lookup = UriLookupPipeline(in_memory_vector_store)
        with pytest.raises(InvalidRequestError) as exc_info:
            await lookup.run(None)
        assert exc_info.value.hint == "Provide the URI of the document to retrieve chunks for"

    @pytest.mark.asyncio
    async def test_invalid_stored_payload(self, mock_vector_store):
        mock_vector_store.scroll.return_value = [VectorPoint(id="x", payload={"uri": URI})]
        lookup = UriLookupPipeline(mock_vector_store, collection_name=COLLECTION)

        with pytest.raises(VectorStoreError):
            await lookup.run(URI)


class TestChunkLookup:

    @pytest.mark.asyncio
    async def test_found(self, mock_vector_store):
        mock_vector_store.retrieve.return_value = [stored_point(1)]
        lookup = ChunkLookupPipeline(mock_vector_store, collection_name=COLLECTION)

        response = await lookup.run(chunk_id_for(URI, 1))

        assert response.chunk.content == "chunk 1"
        assert response.message == "Retrieved chunk"
        mock_vector_store.retrieve.assert_called_once_with(COLLECTION, [chunk_id_for(URI, 1)])

    @pytest.mark.asyncio
    async def test_not_found(self, in_memory_vector_store):
        lookup = ChunkLookupPipeline(in_memory_vector_store, collection_name=COLLECTION)

        response = await lookup.run("missing")

        assert response.success is True
        assert response.chunk is None
        assert response.message == "Chunk not found"

    @pytest.mark.asyncio
    async def test_missing_id(self, in_memory_vector_store):
        with pytest.raises(InvalidRequestError, match="Missing required parameter: id"):
            await ChunkLookupPipeline(in_memory_vector_store).run("")
