"""Knowledge pipelines: ingestion, search, deletion and lookups."""

from .base import BasePipeline
from .deletion import DeletionPipeline
from .ingestion import EMPTY_CONTENT_MESSAGE, IngestionPipeline
from .lookup import ChunkLookupPipeline, UriLookupPipeline
from .ranking import BaseRanker, DenseScoreRanker
from .search import NO_MATCHES_MESSAGE, SearchPipeline

__all__ = [
    "BasePipeline",
    "IngestionPipeline",
    "SearchPipeline",
    "DeletionPipeline",
    "UriLookupPipeline",
    "ChunkLookupPipeline",
    "BaseRanker",
    "DenseScoreRanker",
    "EMPTY_CONTENT_MESSAGE",
    "NO_MATCHES_MESSAGE",
]
