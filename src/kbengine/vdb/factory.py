"""Vector store factory for creating store instances."""

from typing import Any

from loguru import logger

from .base import BaseVectorStore
from .providers.chroma import ChromaVectorStore
from .providers.in_memory import InMemoryVectorStore


class VectorStoreFactory:
    """
    Factory for creating Vector Store instances based on type.
    """

    _registry: dict[str, type[BaseVectorStore]] = {
        "chroma": ChromaVectorStore,
        "in_memory": InMemoryVectorStore,
    }

    @classmethod
    def create(cls, type_name: str, **params: Any) -> BaseVectorStore:
        """
        Create a vector store instance.

        Args:
            type_name: Type identifier (e.g., "chroma", "in_memory")
            **params: Provider configuration parameters

        Raises:
            ValueError: If the store type is not registered
        """
        if type_name not in cls._registry:
            available = ", ".join(cls._registry.keys())
            raise ValueError(
                f"Unknown Vector Store Type: '{type_name}'. Available types: {available}"
            )

        store_class = cls._registry[type_name]
        logger.debug(f"Creating {store_class.__name__} with params: {params}")
        return store_class(**params)

    @classmethod
    def register(cls, type_name: str, store_class: type[BaseVectorStore]):
        """Register a new vector store type.

        Raises:
            TypeError: If store_class is not a subclass of BaseVectorStore
        """
        if not issubclass(store_class, BaseVectorStore):
            raise TypeError(
                f"{store_class.__name__} must be a subclass of BaseVectorStore"
            )

        cls._registry[type_name] = store_class
        logger.info(f"Registered vector store type '{type_name}': {store_class.__name__}")

    @classmethod
    def list_types(cls) -> list[str]:
        """Get list of available vector store types."""
        return list(cls._registry.keys())
