"""
kbengine Error Classification System.

This module provides the hierarchy of exceptions raised by the knowledge
base engine and its provider adapters.

Error Categories:
-----------------
1. Retryable Errors: Transient provider failures that may succeed on retry
   - Rate limiting (HTTP 429)
   - Service unavailable (HTTP 503)
   - Connection failures
   - Timeouts of embedding or vector store calls

2. Permanent Errors: Failures that won't succeed on retry
   - Invalid requests (missing uri/content/query, oversized documents)
   - Authentication errors (HTTP 401/403)
   - Not found (HTTP 404, missing collection)
   - Configuration errors

3. Provider Errors: Failures attributed to a collaborator
   - EmbeddingError: the embedding provider failed or is unavailable
   - VectorStoreError: the vector store failed

The engine never retries internally. Retrying ``ingest`` and ``deleteByUri``
is always safe because chunk ids are deterministic and writes are upserts.

Usage:
------
    from kbengine.errors import InvalidRequestError, RetryableError

    try:
        response = await engine.ingest(uri, content)
    except InvalidRequestError as e:
        # Fix the request, don't retry
        logger.error(f"Rejected: {e.message}")
    except RetryableError as e:
        # Transient provider failure, safe to resubmit
        logger.warning(f"Retry after {e.retry_after}s")
"""

from typing import Any


class KBEngineError(Exception):
    """
    Base exception for all kbengine errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        original_error: The underlying exception that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.original_error:
            base += f" | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None
        }


# =============================================================================
# Retryable Errors - Transient failures that may succeed on retry
# =============================================================================

class RetryableError(KBEngineError):
    """
    Base class for errors that may succeed on retry.

    Attributes:
        retry_after: Suggested wait time before retry (seconds), if known
    """

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)
        self.retry_after = retry_after


class RateLimitError(RetryableError):
    """Raised when a provider rate limit is exceeded (HTTP 429)."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, retry_after, details, original_error)


class ServiceUnavailableError(RetryableError):
    """Raised when a provider is temporarily unavailable (HTTP 503)."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, retry_after, details, original_error)


class ConnectionError(RetryableError):
    """
    Raised when connection to a provider fails.

    This includes DNS resolution failures, refused connections and
    unreachable networks.
    """

    def __init__(
        self,
        message: str = "Failed to connect to service",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, retry_after=None, details=details, original_error=original_error)


class TransientError(RetryableError):
    """Generic retryable error for unclassified transient failures."""
    pass


class OperationTimeoutError(RetryableError):
    """
    Raised when an embedding or vector store call exceeds its timeout.

    A timed-out call fails the enclosing operation; chunks are never
    silently skipped.

    Attributes:
        timeout: The timeout value that was exceeded (seconds)
    """

    def __init__(
        self,
        message: str = "Request timed out",
        timeout: float | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        details["timeout"] = timeout
        super().__init__(message, retry_after=None, details=details, original_error=original_error)
        self.timeout = timeout


# =============================================================================
# Permanent Errors - Failures that won't succeed on retry
# =============================================================================

class PermanentError(KBEngineError):
    """
    Base class for errors that will not succeed on retry.

    These errors require the caller to change the request or the
    deployment configuration.
    """
    pass


class InvalidRequestError(PermanentError):
    """
    Raised when request parameters are invalid.

    Validation happens before any embedding or vector store call, so a
    rejected request has no side effects.

    Attributes:
        hint: Suggestion for fixing the request (optional)
    """

    def __init__(
        self,
        message: str = "Invalid request parameters",
        hint: str | None = None,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)
        self.hint = hint


class AuthenticationError(PermanentError):
    """Raised when a provider rejects the credentials (HTTP 401/403)."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class NotFoundError(PermanentError):
    """Raised when a requested resource is not found (HTTP 404)."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


class CollectionNotFoundError(NotFoundError):
    """
    Raised by vector stores when reading from a collection that was never created.

    Pipelines translate this into an empty result: "nothing has been
    ingested yet" is a normal state.
    """

    def __init__(
        self,
        collection: str,
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        details = details or {}
        details["collection"] = collection
        super().__init__(
            f"Collection '{collection}' does not exist",
            details,
            original_error,
        )
        self.collection = collection


class ConfigurationError(PermanentError):
    """Raised when there's a configuration problem."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        super().__init__(message, details, original_error)


# =============================================================================
# Provider Errors
# =============================================================================

class ProviderError(KBEngineError):
    """Raised when an external collaborator (embedder, vector store) fails."""
    pass


class EmbeddingError(ProviderError):
    """Raised when an embedding operation fails."""
    pass


class EmbeddingUnavailableError(EmbeddingError):
    """Raised when the configured embedder cannot serve requests (e.g. no API key)."""

    def __init__(
        self,
        message: str = "Embedding service not available",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None,
        hint: str | None = "Set OPENAI_API_KEY environment variable to enable embeddings"
    ):
        super().__init__(message, details, original_error)
        self.hint = hint


class VectorStoreError(ProviderError):
    """Raised when a vector store operation fails."""
    pass


# =============================================================================
# Helper Functions
# =============================================================================

def is_retryable(error: Exception) -> bool:
    """
    Check if an error is retryable.

    Args:
        error: The exception to check

    Returns:
        True if the error is an instance of RetryableError
    """
    return isinstance(error, RetryableError)


def classify_http_error(status_code: int, message: str = "", headers: dict | None = None) -> KBEngineError:
    """
    Classify an HTTP error based on status code.

    Args:
        status_code: HTTP status code
        message: Error message from response
        headers: Response headers (used to extract Retry-After)

    Returns:
        Appropriate KBEngineError subclass instance

    Example:
        if response.status_code >= 400:
            raise classify_http_error(
                response.status_code,
                response.text,
                dict(response.headers)
            )
    """
    headers = headers or {}
    retry_after = None

    # httpx lowercases header names
    raw_retry_after = headers.get("Retry-After", headers.get("retry-after"))
    if raw_retry_after is not None:
        try:
            retry_after = float(raw_retry_after)
        except (ValueError, TypeError):
            retry_after = None

    details = {"status_code": status_code}

    if status_code == 429:
        return RateLimitError(
            message=message or "API rate limit exceeded",
            retry_after=retry_after,
            details=details
        )
    elif status_code == 401:
        return AuthenticationError(
            message=message or "Authentication failed - invalid API key",
            details=details
        )
    elif status_code == 403:
        return AuthenticationError(
            message=message or "Access forbidden - insufficient permissions",
            details=details
        )
    elif status_code == 400:
        return InvalidRequestError(
            message=message or "Invalid request parameters",
            details=details
        )
    elif status_code == 404:
        return NotFoundError(
            message=message or "Resource not found",
            details=details
        )
    elif status_code == 503:
        return ServiceUnavailableError(
            message=message or "Service temporarily unavailable",
            retry_after=retry_after,
            details=details
        )
    elif status_code >= 500:
        return TransientError(
            message=message or f"Server error (HTTP {status_code})",
            details=details
        )
    else:
        return PermanentError(
            message=message or f"HTTP error {status_code}",
            details=details
        )


def wrap_exception(
    error: Exception,
    context: str = "",
    retryable: bool | None = None
) -> KBEngineError:
    """
    Wrap a generic exception in an appropriate KBEngineError.

    Errors that are already KBEngineError instances are returned unchanged.

    Args:
        error: The original exception
        context: Additional context about where the error occurred
        retryable: Override retryability detection (None = auto-detect)

    Returns:
        KBEngineError instance wrapping the original error
    """
    if isinstance(error, KBEngineError):
        return error

    error_str = str(error).lower()
    error_type = type(error).__name__

    message = f"{context}: {error}" if context else str(error)

    if "timeout" in error_str or "timed out" in error_str or "Timeout" in error_type:
        return OperationTimeoutError(message=message, original_error=error)

    if any(x in error_str for x in ["connection", "connect", "network", "dns"]):
        return ConnectionError(message=message, original_error=error)

    if any(x in error_str for x in ["rate limit", "too many requests", "429"]):
        return RateLimitError(message=message, original_error=error)

    if any(x in error_str for x in ["auth", "api key", "credential", "401", "403"]):
        return AuthenticationError(message=message, original_error=error)

    if retryable is True:
        return TransientError(message=message, original_error=error)
    elif retryable is False:
        return PermanentError(message=message, original_error=error)

    if error_type in ("ConnectionError", "ConnectError"):
        return TransientError(message=message, original_error=error)

    # Unknown errors are permanent so callers don't loop on them
    return PermanentError(message=message, original_error=error)
