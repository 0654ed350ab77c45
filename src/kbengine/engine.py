"""Knowledge Engine - high-level facade over the knowledge pipelines."""

from typing import Any

from loguru import logger
from pydantic import ValidationError

from .chunker.base import BaseChunker
from .config.factory import ComponentFactory
from .config.models import EngineConfig
from .config.settings import Settings
from .embedder.base import BaseEmbedder
from .entities.operations import (
    DeleteByUriResponse,
    ErrorDetail,
    ErrorResponse,
    GetByUriResponse,
    GetChunkResponse,
    IngestResponse,
    KnowledgeRequest,
    KnowledgeResponse,
    Operation,
    SearchResponse,
)
from .errors import InvalidRequestError, KBEngineError
from .knowledge import (
    ChunkLookupPipeline,
    DeletionPipeline,
    IngestionPipeline,
    SearchPipeline,
    UriLookupPipeline,
)
from .knowledge.ranking import BaseRanker
from .utils import run_async_in_sync_context
from .vdb.base import BaseVectorStore

SUPPORTED_OPERATIONS = [op.value for op in Operation]
UNSUPPORTED_OPERATION_HINT = (
    'Use "ingest" to add documents, "search" for semantic search, '
    '"getByUri" or "getChunk" to retrieve chunks, or "deleteByUri" to remove a document'
)


class KnowledgeEngine:
    """High-level orchestrator for knowledge base operations.

    Builds the chunker, embedder and vector store from configuration (any of
    them can be injected instead) and exposes one coroutine per operation,
    plus ``handle`` which dispatches an operation-discriminated request and
    converts engine errors into ``ErrorResponse`` values.

    Attributes:
        config: Engine configuration
        chunker: Text chunker
        embedder: Embedding generator
        vector_store: Point storage
        ingestion / search_pipeline / deletion / uri_lookup / chunk_lookup:
            One pipeline per operation
    """

    def __init__(
        self,
        config: EngineConfig,
        chunker: BaseChunker | None = None,
        embedder: BaseEmbedder | None = None,
        vector_store: BaseVectorStore | None = None,
        ranker: BaseRanker | None = None,
    ):
        """Initialize the engine from configuration.

        Raises:
            ConfigurationError: If a component type or its parameters are invalid
        """
        self.config = config
        logger.info("Initializing Knowledge Engine")

        self.chunker = chunker or ComponentFactory.create_chunker(config.chunker)
        self.embedder = embedder or ComponentFactory.create_embedder(config.embedder)
        self.vector_store = vector_store or ComponentFactory.create_vector_store(config.vector_store)

        common = {
            "collection_name": config.collection_name,
            "request_timeout": config.request_timeout,
        }
        self.ingestion = IngestionPipeline(
            self.chunker,
            self.embedder,
            self.vector_store,
            max_document_size=config.max_document_size,
            embed_concurrency=config.embed_concurrency,
            **common,
        )
        self.search_pipeline = SearchPipeline(
            self.embedder,
            self.vector_store,
            default_limit=config.search_limit,
            default_score_threshold=config.score_threshold,
            ranker=ranker,
            **common,
        )
        self.deletion = DeletionPipeline(self.vector_store, **common)
        self.uri_lookup = UriLookupPipeline(self.vector_store, **common)
        self.chunk_lookup = ChunkLookupPipeline(self.vector_store, **common)

        logger.info(
            f"Knowledge Engine initialized: embedder={type(self.embedder).__name__}, "
            f"store={type(self.vector_store).__name__}, collection={config.collection_name}"
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "KnowledgeEngine":
        """Build an engine from environment-derived settings."""
        if settings is None:
            from .config.settings import settings as global_settings
            settings = global_settings
        return cls(EngineConfig.from_settings(settings))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def ingest(
        self, uri: str, content: str, metadata: dict[str, Any] | None = None
    ) -> IngestResponse:
        return await self.ingestion.run(uri, content, metadata)

    async def search(
        self,
        query: str,
        limit: int | None = None,
        score_threshold: float | None = None,
        uri_filter: str | None = None,
    ) -> SearchResponse:
        return await self.search_pipeline.run(query, limit, score_threshold, uri_filter)

    async def delete_by_uri(self, uri: str) -> DeleteByUriResponse:
        return await self.deletion.run(uri)

    async def get_by_uri(self, uri: str) -> GetByUriResponse:
        return await self.uri_lookup.run(uri)

    async def get_chunk(self, chunk_id: str) -> GetChunkResponse:
        return await self.chunk_lookup.run(chunk_id)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def execute(self, request: KnowledgeRequest) -> KnowledgeResponse:
        """Run the operation named by the request.

        Raises:
            InvalidRequestError: Unsupported operation or invalid fields
            KBEngineError: Any failure of the operation itself
        """
        operation = request.operation
        logger.debug(f"Processing knowledge request: operation={operation}")

        if operation == Operation.INGEST:
            return await self.ingest(request.uri, request.content, request.metadata)
        if operation == Operation.SEARCH:
            return await self.search(
                request.query, request.limit, request.score_threshold, request.uri_filter
            )
        if operation == Operation.DELETE_BY_URI:
            return await self.delete_by_uri(request.uri)
        if operation == Operation.GET_BY_URI:
            return await self.get_by_uri(request.uri)
        if operation == Operation.GET_CHUNK:
            return await self.get_chunk(request.id)

        raise InvalidRequestError(
            f"Unsupported operation: {operation}",
            hint=UNSUPPORTED_OPERATION_HINT,
            details={"supportedOperations": SUPPORTED_OPERATIONS},
        )

    async def handle(self, request: KnowledgeRequest | dict[str, Any]) -> KnowledgeResponse:
        """Dispatch a request and return its response or an ``ErrorResponse``.

        Args:
            request: A ``KnowledgeRequest`` or its camelCase dict form
        """
        if isinstance(request, dict):
            try:
                request = KnowledgeRequest.model_validate(request)
            except ValidationError as e:
                error = InvalidRequestError(
                    "Invalid request",
                    hint="Check the request fields against the operation",
                    details={"errors": e.errors(include_url=False, include_context=False)},
                    original_error=e,
                )
                return to_error_response(error, None)

        try:
            return await self.execute(request)
        except KBEngineError as e:
            logger.error(f"Knowledge operation '{request.operation}' failed: {e}")
            return to_error_response(e, request.operation)

    def handle_sync(self, request: KnowledgeRequest | dict[str, Any]) -> KnowledgeResponse:
        """Synchronous version of ``handle``."""
        return run_async_in_sync_context(self.handle(request))

    def health(self) -> dict[str, Any]:
        """Report collaborator status."""
        store_ok = self.vector_store.health_check()
        return {
            "status": "ok" if store_ok else "degraded",
            "vectorStore": {"type": type(self.vector_store).__name__, "healthy": store_ok},
            "embedder": self.embedder.status(),
        }


def to_error_response(error: KBEngineError, operation: str | None) -> ErrorResponse:
    """Convert an engine error into the wire error shape."""
    return ErrorResponse(
        error=ErrorDetail(
            type=type(error).__name__,
            message=error.message,
            operation=operation or error.details.get("operation"),
            hint=getattr(error, "hint", None),
            details={k: v for k, v in error.details.items() if k != "operation"},
        )
    )
