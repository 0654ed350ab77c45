"""Tests for the provider call wrapper shared by every pipeline."""

import threading
import time

import pytest

from kbengine.errors import (
    EmbeddingError,
    InvalidRequestError,
    OperationTimeoutError,
    TransientError,
    VectorStoreError,
)
from kbengine.knowledge import BasePipeline
from kbengine.knowledge.base import require_text


class EchoPipeline(BasePipeline):

    async def run(self, func, *args, **kwargs):
        return await self._call(func, *args, context="Echo", **kwargs)


@pytest.fixture
def pipeline(in_memory_vector_store):
    return EchoPipeline(in_memory_vector_store, request_timeout=0.05)


class TestCall:

    @pytest.mark.asyncio
    async def test_returns_result(self, pipeline):
        assert await pipeline.run(lambda x: x * 2, 21) == 42

    @pytest.mark.asyncio
    async def test_timeout(self, pipeline):
        with pytest.raises(OperationTimeoutError) as exc_info:
            await pipeline.run(time.sleep, 0.5)
        assert exc_info.value.timeout == 0.05

    @pytest.mark.asyncio
    async def test_timed_out_call_still_completes(self, pipeline):
        finished = threading.Event()

        def slow_write():
            time.sleep(0.2)
            finished.set()

        with pytest.raises(OperationTimeoutError):
            await pipeline.run(slow_write)
        assert finished.wait(timeout=2.0)

    @pytest.mark.asyncio
    async def test_engine_errors_pass_through(self, pipeline):
        def fail():
            raise TransientError("busy")

        with pytest.raises(TransientError):
            await pipeline.run(fail)

    @pytest.mark.asyncio
    async def test_unclassified_failure_uses_error_class(self, pipeline):
        def fail():
            raise KeyError("boom")

        with pytest.raises(VectorStoreError, match="Echo failed"):
            await pipeline.run(fail)
        with pytest.raises(EmbeddingError):
            await pipeline.run(fail, error_cls=EmbeddingError)


class TestRequireText:

    def test_accepts_text(self):
        assert require_text("u", "uri", "getByUri", "hint") == "u"

    def test_rejects_non_string(self):
        with pytest.raises(InvalidRequestError) as exc_info:
            require_text(42, "uri", "getByUri", "hint")

        assert exc_info.value.details == {"operation": "getByUri", "field": "uri"}
        assert exc_info.value.hint == "hint"
