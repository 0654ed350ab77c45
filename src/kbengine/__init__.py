"""
kbengine - Knowledge base ingestion and semantic search engine.

Documents are split into overlapping chunks with deterministic ids, embedded,
and upserted into a vector store, where they can be searched, listed and
removed by uri.
"""

__version__ = "0.1.0"

from .chunker import BaseChunker, ChunkerFactory, RecursiveCharacterChunker
from .config import ComponentConfig, ComponentFactory, EngineConfig, Settings, load_settings
from .embedder import BaseEmbedder, EmbedderFactory, MockEmbedder, OpenAIEmbedder
from .engine import KnowledgeEngine, to_error_response
from .entities import (
    DeleteByUriResponse,
    ErrorResponse,
    GetByUriResponse,
    GetChunkResponse,
    IngestResponse,
    KnowledgeChunk,
    KnowledgeRequest,
    MatchType,
    Operation,
    SearchResponse,
    SearchResultItem,
)
from .identity import checksum_of, chunk_id_for
from .vdb import BaseVectorStore, ChromaVectorStore, InMemoryVectorStore, VectorStoreFactory

__all__ = [
    "__version__",
    # Engine
    "KnowledgeEngine",
    "to_error_response",
    # Configuration
    "ComponentConfig",
    "ComponentFactory",
    "EngineConfig",
    "Settings",
    "load_settings",
    # Entities
    "KnowledgeChunk",
    "KnowledgeRequest",
    "Operation",
    "MatchType",
    "IngestResponse",
    "SearchResponse",
    "SearchResultItem",
    "DeleteByUriResponse",
    "GetByUriResponse",
    "GetChunkResponse",
    "ErrorResponse",
    # Identity
    "chunk_id_for",
    "checksum_of",
    # Components
    "BaseChunker",
    "ChunkerFactory",
    "RecursiveCharacterChunker",
    "BaseEmbedder",
    "EmbedderFactory",
    "MockEmbedder",
    "OpenAIEmbedder",
    "BaseVectorStore",
    "InMemoryVectorStore",
    "ChromaVectorStore",
    "VectorStoreFactory",
]
