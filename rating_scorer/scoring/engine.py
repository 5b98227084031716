"""Scoring engine: all three methods under one set of parameters.

The engine owns no state beyond the immutable ``ScoringParameters`` it was
built with, so one instance can be shared freely between callers.
"""
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

import structlog

from rating_scorer.models.enums import ScoringMethod
from rating_scorer.models.rating import (
    RatingInput,
    ScenarioDeviation,
    ScoringParameters,
)
from rating_scorer.scoring.bayesian import bayesian_score
from rating_scorer.scoring.weighted import weighted_score
from rating_scorer.scoring.wilson import wilson_score

if TYPE_CHECKING:
    from rating_scorer.config import Settings

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScoreResult:
    """Scores of a single rating input under every method."""

    weighted: float
    bayesian: float
    wilson:   float

    def get(self, method: ScoringMethod) -> float:
        """Score for one method."""
        return getattr(self, ScoringMethod(method).value)

    def to_dict(self) -> dict:
        return {
            "weighted": self.weighted,
            "bayesian": self.bayesian,
            "wilson": self.wilson,
        }


class ScoringEngine:
    """Compute weighted, Bayesian and Wilson scores for rating inputs.

    Parameters
    ----------
    params:
        Threshold, prior, z and scale shared by every call. Defaults to
        ``ScoringParameters()`` (threshold 1, prior 3.5, z 1.96, scale 5).
    """

    def __init__(self, params: Optional[ScoringParameters] = None) -> None:
        self.params = params or ScoringParameters()
        self._dispatch: dict[ScoringMethod, Callable[[RatingInput], float]] = {
            ScoringMethod.WEIGHTED: self.weighted,
            ScoringMethod.BAYESIAN: self.bayesian,
            ScoringMethod.WILSON:   self.wilson,
        }
        logger.debug("scoring_engine_initialized", **self.params.model_dump())

    @classmethod
    def from_settings(cls, settings: Optional["Settings"] = None) -> "ScoringEngine":
        """Build an engine from application settings (``get_settings()`` by default)."""
        if settings is None:
            from rating_scorer.config import get_settings
            settings = get_settings()
        return cls(settings.scoring_parameters())

    # ── single methods ────────────────────────────────────────────────────────

    def weighted(self, rating: RatingInput) -> float:
        return weighted_score(rating.average_rating, rating.rating_count)

    def bayesian(self, rating: RatingInput) -> float:
        return bayesian_score(
            rating.average_rating,
            rating.rating_count,
            self.params.minimum_ratings_threshold,
            self.params.assumed_average,
        )

    def wilson(self, rating: RatingInput) -> float:
        return wilson_score(
            rating.average_rating,
            rating.rating_count,
            max_rating_scale=self.params.max_rating_scale,
            z=self.params.confidence_z,
        )

    # ── public API ────────────────────────────────────────────────────────────

    def score_by_method(self, method: ScoringMethod, rating: RatingInput) -> float:
        """Score ``rating`` with a single method.

        Raises:
            ValueError: If ``method`` is not a known scoring method.
        """
        return self._dispatch[ScoringMethod(method)](rating)

    def score(self, rating: RatingInput) -> ScoreResult:
        """Score ``rating`` with all three methods."""
        result = ScoreResult(
            weighted=self.weighted(rating),
            bayesian=self.bayesian(rating),
            wilson=self.wilson(rating),
        )
        logger.debug(
            "scores_calculated",
            average_rating=rating.average_rating,
            rating_count=rating.rating_count,
            **result.to_dict(),
        )
        return result

    def compare(self, rating: RatingInput, deviation: Optional[ScenarioDeviation] = None):
        """Score ``rating`` alongside its higher/lower what-if scenarios."""
        from rating_scorer.scoring.scenario import compute_scenario

        return compute_scenario(rating, self.params, deviation or ScenarioDeviation())
