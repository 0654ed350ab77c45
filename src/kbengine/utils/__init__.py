"""Utility functions for kbengine."""

from .async_helpers import run_async_in_sync_context
from .performance import timed, timer
from .similarity import cosine_similarity

__all__ = [
    "cosine_similarity",
    "run_async_in_sync_context",
    "timer",
    "timed",
]
