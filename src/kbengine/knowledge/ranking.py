"""Ranking of similarity query results.

The ranker is the seam where sparse or hybrid scoring (and fusion such as
RRF) would plug in. Only dense cosine ranking exists today.
"""

from abc import ABC, abstractmethod

from ..entities.point import ScoredPoint


class BaseRanker(ABC):
    """Orders and filters scored points into the final result list."""

    @abstractmethod
    def rank(
        self, points: list[ScoredPoint], limit: int, score_threshold: float
    ) -> list[ScoredPoint]:
        pass


class DenseScoreRanker(BaseRanker):
    """Drop points below the threshold, sort by descending score, truncate.

    Ties are broken by id so equal scores give a stable order.
    """

    def rank(
        self, points: list[ScoredPoint], limit: int, score_threshold: float
    ) -> list[ScoredPoint]:
        kept = [p for p in points if p.score >= score_threshold]
        kept.sort(key=lambda p: (-p.score, p.id))
        return kept[:limit]
