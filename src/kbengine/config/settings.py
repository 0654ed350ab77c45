import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# This file: src/kbengine/config/settings.py
SERVER_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = SERVER_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()


class Settings(BaseModel):
    """Global Application Settings"""

    # Environment
    ENV: str = Field(default="development", description="Environment: development, production, testing")
    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Knowledge base
    KB_COLLECTION_NAME: str = Field(default="knowledge-base", description="Vector store collection")
    KB_CHUNK_SIZE: int = Field(default=1000, description="Maximum characters per chunk")
    KB_CHUNK_OVERLAP: int = Field(default=200, description="Characters shared by consecutive chunks")
    KB_MAX_DOCUMENT_SIZE: int = Field(default=1_048_576, description="Maximum document size in UTF-8 bytes")
    KB_SEARCH_LIMIT: int = Field(default=10, description="Default number of search results")
    KB_SCORE_THRESHOLD: float = Field(default=0.3, description="Default minimum similarity")
    KB_EMBED_CONCURRENCY: int = Field(default=4, description="Concurrent embedding calls per ingest")
    KB_REQUEST_TIMEOUT: float = Field(default=30.0, description="Timeout of each provider call (seconds)")

    # Embeddings
    EMBEDDING_PROVIDER: str = Field(default="openai", description="Embedder type: openai, mock")
    OPENAI_API_KEY: str | None = Field(default=None, description="OpenAI API Key")
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1", description="OpenAI-compatible base URL")
    EMBEDDING_MODEL: str = Field(default="text-embedding-3-small", description="Embedding model")
    EMBEDDING_DIMENSIONS: int = Field(default=1536, description="Embedding vector size")

    # Vector store
    VECTOR_STORE_TYPE: str = Field(default="chroma", description="Vector store type: chroma, in_memory")
    CHROMA_DB_PATH: str = Field(default="storage/chroma_db", description="Path to ChromaDB storage")
    CHROMA_HOST: str | None = Field(default=None, description="Chroma server host (uses local storage if unset)")
    CHROMA_PORT: int = Field(default=8000, description="Chroma server port")

    # Tracing
    OTEL_ENABLED: bool = Field(default=False, description="Enable OpenTelemetry tracing")
    OTEL_EXPORTER_OTLP_ENDPOINT: str | None = Field(default=None, description="OTLP endpoint")

    model_config = {
        "frozen": True,
    }


def load_settings() -> Settings:
    """Load settings from environment variables."""
    values = {
        "ENV": os.getenv("ENV", "development"),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
        "KB_COLLECTION_NAME": os.getenv("KB_COLLECTION_NAME", "knowledge-base"),
        "KB_CHUNK_SIZE": os.getenv("KB_CHUNK_SIZE", "1000"),
        "KB_CHUNK_OVERLAP": os.getenv("KB_CHUNK_OVERLAP", "200"),
        "KB_MAX_DOCUMENT_SIZE": os.getenv("KB_MAX_DOCUMENT_SIZE", "1048576"),
        "KB_SEARCH_LIMIT": os.getenv("KB_SEARCH_LIMIT", "10"),
        "KB_SCORE_THRESHOLD": os.getenv("KB_SCORE_THRESHOLD", "0.3"),
        "KB_EMBED_CONCURRENCY": os.getenv("KB_EMBED_CONCURRENCY", "4"),
        "KB_REQUEST_TIMEOUT": os.getenv("KB_REQUEST_TIMEOUT", "30.0"),
        "EMBEDDING_PROVIDER": os.getenv("EMBEDDING_PROVIDER", "openai"),
        "OPENAI_API_KEY": os.getenv("OPENAI_API_KEY") or None,
        "OPENAI_BASE_URL": os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        "EMBEDDING_MODEL": os.getenv("EMBEDDING_MODEL", "text-embedding-3-small"),
        "EMBEDDING_DIMENSIONS": os.getenv("EMBEDDING_DIMENSIONS", "1536"),
        "VECTOR_STORE_TYPE": os.getenv("VECTOR_STORE_TYPE", "chroma"),
        "CHROMA_DB_PATH": os.getenv("CHROMA_DB_PATH", str(SERVER_ROOT / "storage/chroma_db")),
        "CHROMA_HOST": os.getenv("CHROMA_HOST") or None,
        "CHROMA_PORT": os.getenv("CHROMA_PORT", "8000"),
        "OTEL_ENABLED": os.getenv("OTEL_ENABLED", "false"),
        "OTEL_EXPORTER_OTLP_ENDPOINT": os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or None,
    }
    # String values are coerced to the declared field types
    return Settings.model_validate(values)


# Global settings instance
settings = load_settings()
