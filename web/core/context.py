"""Request-scoped access to the engine and error-to-status mapping."""

from fastapi import Request

from kbengine import KnowledgeEngine
from kbengine.errors import (
    AuthenticationError,
    EmbeddingUnavailableError,
    InvalidRequestError,
    KBEngineError,
    NotFoundError,
    ProviderError,
    is_retryable,
)


def get_engine(request: Request) -> KnowledgeEngine:
    """Dependency injection: the engine built at startup."""
    return request.app.state.engine


def status_code_for(error: KBEngineError) -> int:
    """HTTP status for an engine error.

    400 for rejected requests, 503 when a collaborator is unavailable or
    failed transiently, 502 for other collaborator failures, 500 otherwise.
    """
    if isinstance(error, InvalidRequestError):
        return 400
    if (
        isinstance(error, EmbeddingUnavailableError)
        or is_retryable(error)
        or (error.original_error is not None and is_retryable(error.original_error))
    ):
        return 503
    if isinstance(error, (ProviderError, AuthenticationError, NotFoundError)):
        return 502
    return 500
