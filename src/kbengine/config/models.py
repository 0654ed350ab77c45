"""Configuration models for engine components.

Every pluggable component is configured via a type string and optional
parameters, resolved by the matching factory at startup.
"""

from typing import Any

from pydantic import BaseModel, Field

from .settings import Settings

MAX_DOCUMENT_SIZE = 1_048_576


class ComponentConfig(BaseModel):
    """Configuration for a single component.

    Attributes:
        type: Component type identifier (e.g., "recursive", "openai", "chroma")
        params: Component-specific parameters as a dictionary
    """

    type: str
    params: dict[str, Any] = Field(default_factory=dict)


class EngineConfig(BaseModel):
    """Main knowledge engine configuration.

    Attributes:
        chunker: Chunker component configuration
        embedder: Embedder component configuration
        vector_store: Vector store component configuration
        collection_name: The single collection holding every chunk
        max_document_size: Ingest ceiling in UTF-8 bytes
        search_limit: Default number of search results
        score_threshold: Default minimum similarity for search results
        embed_concurrency: Concurrent embedding calls per ingest
        request_timeout: Timeout of each embedder/vector store call (seconds)
    """

    chunker: ComponentConfig = Field(
        default_factory=lambda: ComponentConfig(
            type="recursive", params={"chunk_size": 1000, "chunk_overlap": 200}
        )
    )
    embedder: ComponentConfig
    vector_store: ComponentConfig

    collection_name: str = "knowledge-base"
    max_document_size: int = Field(default=MAX_DOCUMENT_SIZE, ge=1)
    search_limit: int = Field(default=10, ge=1)
    score_threshold: float = 0.3
    embed_concurrency: int = Field(default=4, ge=1)
    request_timeout: float = Field(default=30.0, gt=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "EngineConfig":
        """Build the configuration from environment-derived settings."""
        if settings.EMBEDDING_PROVIDER == "openai":
            embedder_params: dict[str, Any] = {
                "api_key": settings.OPENAI_API_KEY,
                "base_url": settings.OPENAI_BASE_URL,
                "model": settings.EMBEDDING_MODEL,
                "dimensions": settings.EMBEDDING_DIMENSIONS,
                "timeout": settings.KB_REQUEST_TIMEOUT,
            }
        elif settings.EMBEDDING_PROVIDER == "mock":
            embedder_params = {"dimension": settings.EMBEDDING_DIMENSIONS}
        else:
            embedder_params = {}

        if settings.VECTOR_STORE_TYPE == "chroma":
            store_params: dict[str, Any] = {
                "persist_directory": settings.CHROMA_DB_PATH,
                "host": settings.CHROMA_HOST,
                "port": settings.CHROMA_PORT,
            }
        else:
            store_params = {}

        return cls(
            chunker=ComponentConfig(
                type="recursive",
                params={
                    "chunk_size": settings.KB_CHUNK_SIZE,
                    "chunk_overlap": settings.KB_CHUNK_OVERLAP,
                },
            ),
            embedder=ComponentConfig(type=settings.EMBEDDING_PROVIDER, params=embedder_params),
            vector_store=ComponentConfig(type=settings.VECTOR_STORE_TYPE, params=store_params),
            collection_name=settings.KB_COLLECTION_NAME,
            max_document_size=settings.KB_MAX_DOCUMENT_SIZE,
            search_limit=settings.KB_SEARCH_LIMIT,
            score_threshold=settings.KB_SCORE_THRESHOLD,
            embed_concurrency=settings.KB_EMBED_CONCURRENCY,
            request_timeout=settings.KB_REQUEST_TIMEOUT,
        )
