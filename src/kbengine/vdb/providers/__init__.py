"""Provider implementations for vector stores."""

from .chroma import ChromaVectorStore
from .in_memory import InMemoryVectorStore

__all__ = ["ChromaVectorStore", "InMemoryVectorStore"]
