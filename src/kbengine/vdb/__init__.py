"""Vector store module.

Provider-agnostic point storage with similarity search, payload filtering
and deletion, plus a factory selecting the configured provider.
"""

from .base import BaseVectorStore
from .factory import VectorStoreFactory
from .providers.chroma import ChromaVectorStore
from .providers.in_memory import InMemoryVectorStore

__all__ = ["BaseVectorStore", "ChromaVectorStore", "InMemoryVectorStore", "VectorStoreFactory"]
