"""Component factory for dynamic loading using type-based configuration."""

from loguru import logger

from ..chunker import BaseChunker, ChunkerFactory
from ..embedder import BaseEmbedder, EmbedderFactory
from ..errors import ConfigurationError
from ..vdb import BaseVectorStore, VectorStoreFactory
from .models import ComponentConfig


class ComponentFactory:
    """Unified factory for creating all component types.

    This factory delegates to specialized factories based on component type
    and reports bad configuration as ``ConfigurationError``.
    """

    @staticmethod
    def create_chunker(config: ComponentConfig) -> BaseChunker:
        """Create a chunker from configuration."""
        logger.info(f"Creating chunker: {config.type}")
        return _build(ChunkerFactory.create, "chunker", config)

    @staticmethod
    def create_embedder(config: ComponentConfig) -> BaseEmbedder:
        """Create an embedder from configuration."""
        logger.info(f"Creating embedder: {config.type}")
        return _build(EmbedderFactory.create, "embedder", config)

    @staticmethod
    def create_vector_store(config: ComponentConfig) -> BaseVectorStore:
        """Create a vector store from configuration."""
        logger.info(f"Creating vector store: {config.type}")
        return _build(VectorStoreFactory.create, "vector_store", config)


def _build(create, component: str, config: ComponentConfig):
    try:
        return create(config.type, **config.params)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(
            f"Invalid {component} configuration: {e}",
            details={"component": component, "type": config.type},
            original_error=e,
        ) from e
