import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

from ..errors import (
    InvalidRequestError,
    KBEngineError,
    OperationTimeoutError,
    RetryableError,
    VectorStoreError,
    wrap_exception,
)
from ..vdb.base import BaseVectorStore

T = TypeVar("T")


class BasePipeline(ABC):
    """
    Abstract base class for all knowledge pipelines.

    Pipelines orchestrate the chunker, embedder and vector store to achieve
    one operation. Blocking provider calls go through ``_call``, which runs
    them in a worker thread under the configured timeout.
    """

    def __init__(
        self,
        store: BaseVectorStore,
        collection_name: str = "knowledge-base",
        request_timeout: float = 30.0,
    ):
        self.store = store
        self.collection_name = collection_name
        self.request_timeout = request_timeout

    @abstractmethod
    async def run(self, *args, **kwargs) -> Any:
        """Execute the pipeline."""
        pass

    async def _call(
        self,
        func: Callable[..., T],
        *args: Any,
        context: str,
        error_cls: type[KBEngineError] = VectorStoreError,
    ) -> T:
        """
        Run a blocking provider call off the event loop.

        Args:
            func: Provider method
            *args: Positional arguments for ``func``
            context: Short description used in error messages
            error_cls: Error raised for unclassified provider failures

        Raises:
            OperationTimeoutError: If the call exceeds ``request_timeout``
            KBEngineError: Provider errors pass through; transient failures
                are classified as retryable, anything else becomes ``error_cls``

        Note:
            ``wait_for`` cannot stop the worker thread. A call that timed out may
            still complete afterwards (an upsert can land after the timeout is
            reported). Deterministic ids make resubmitting the operation the
            way to converge.
        """
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, *args), timeout=self.request_timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"{context} timed out after {self.request_timeout}s")
            raise OperationTimeoutError(
                f"{context} timed out after {self.request_timeout}s",
                timeout=self.request_timeout,
                original_error=e,
            ) from e
        except KBEngineError:
            raise
        except Exception as e:
            classified = wrap_exception(e, context)
            if isinstance(classified, RetryableError):
                raise classified from e
            raise error_cls(f"{context} failed: {e}", original_error=e) from e


def require_text(value: Any, field: str, operation: str, hint: str) -> str:
    """Return ``value`` if it is a non-empty string, else reject the request."""
    if not isinstance(value, str) or not value:
        raise InvalidRequestError(
            f"Missing required parameter: {field}",
            hint=hint,
            details={"operation": operation, "field": field},
        )
    return value
