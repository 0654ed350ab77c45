"""Vector store point types shared by every provider."""

from typing import Any

from pydantic import BaseModel, Field


class VectorPoint(BaseModel):
    """A stored point: identifier, dense vector and payload.

    ``vector`` is ``None`` on reads that skip vectors (scroll, retrieve).
    """

    id: str
    vector: list[float] | None = None
    payload: dict[str, Any] = Field(default_factory=dict)


class ScoredPoint(BaseModel):
    """A point returned by a similarity query, with its cosine similarity."""

    id: str
    score: float
    payload: dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "frozen": True,
    }


class PayloadFilter(BaseModel):
    """Conjunction of exact-equality conditions on top-level payload keys.

    Example:
        >>> PayloadFilter.match(uri="https://x/doc").must
        {'uri': 'https://x/doc'}
    """

    must: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def match(cls, **conditions: Any) -> "PayloadFilter":
        return cls(must=conditions)

    def matches(self, payload: dict[str, Any]) -> bool:
        """Check a payload against every condition."""
        return all(payload.get(key) == value for key, value in self.must.items())
