"""What-if scenario comparison.

Formulas
--------
  higher.rating = clamp(R × (1 + Δr/100), 0, scale)
  higher.count  = max(0, round(n × (1 − Δc/100)))
  lower.rating  = clamp(R × (1 − Δr/100), 0, scale)
  lower.count   = max(0, round(n × (1 + Δc/100)))

  Δr = rating deviation %, Δc = reviews deviation %.
  Counts are rounded half-up.

"Higher" trades reviews for rating; "lower" (shown as "More Reviews") trades
rating for reviews. Comparing the three rows shows how each method weighs
rating against volume.
"""
from dataclasses import dataclass
from typing import Iterator

import structlog

from rating_scorer.models.enums import ScenarioName, ScoringMethod
from rating_scorer.models.rating import (
    RatingInput,
    ScenarioDeviation,
    ScoringParameters,
)
from rating_scorer.scoring.engine import ScoreResult, ScoringEngine
from rating_scorer.scoring.extremes import Extremes, find_extremes
from rating_scorer.scoring.utils import clamp, round_half_up

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ScenarioRow:
    """One scenario: its (possibly perturbed) input and all three scores."""

    name:   ScenarioName
    rating: RatingInput
    scores: ScoreResult

    def to_dict(self) -> dict:
        return {
            "scenario": self.name.value,
            "average_rating": self.rating.average_rating,
            "rating_count": self.rating.rating_count,
            **self.scores.to_dict(),
        }


@dataclass(frozen=True)
class ScenarioSet:
    """Base input plus the higher-rating and more-reviews scenarios."""

    current:   ScenarioRow
    higher:    ScenarioRow
    lower:     ScenarioRow
    deviation: ScenarioDeviation

    def rows(self) -> Iterator[ScenarioRow]:
        """Rows in display order: current, higher, lower."""
        yield self.current
        yield self.higher
        yield self.lower

    def column(self, method: ScoringMethod) -> list[float]:
        """Scores of one method across the rows, in display order."""
        return [row.scores.get(method) for row in self.rows()]

    def extremes(self) -> dict[ScoringMethod, Extremes]:
        """Highest / lowest rows per scoring method."""
        return {method: find_extremes(self.column(method)) for method in ScoringMethod}

    def to_dict(self) -> dict:
        return {
            "deviation": self.deviation.model_dump(),
            "rows": [row.to_dict() for row in self.rows()],
        }


def _perturb(
    base: RatingInput,
    rating_factor: float,
    count_factor: float,
    scale: float,
) -> RatingInput:
    count = base.rating_count * count_factor
    return RatingInput(
        average_rating=clamp(base.average_rating * rating_factor, 0.0, scale),
        rating_count=round_half_up(count) if count > 0 else 0,
    )


def compute_scenario(
    base: RatingInput,
    params: ScoringParameters,
    deviation: ScenarioDeviation,
) -> ScenarioSet:
    """Derive the comparison scenarios and score all three rows.

    Out-of-range deviations never raise; derived ratings are clamped to
    [0, max_rating_scale] and counts to [0, ∞). The base rating is clamped to
    the scale as well so the Wilson score stays defined.

    Args:
        base: The item's observed rating data.
        params: Scoring parameters applied to every row.
        deviation: Percent deviations for the two scenarios.

    Returns:
        ScenarioSet with current, higher and lower rows.
    """
    scale = params.max_rating_scale
    rating_dev = deviation.rating_deviation_percent / 100
    reviews_dev = deviation.reviews_deviation_percent / 100

    current = _perturb(base, 1.0, 1.0, scale)
    if current.average_rating != base.average_rating:
        logger.warning(
            "base_rating_clamped",
            average_rating=base.average_rating,
            clamped_to=current.average_rating,
            max_rating_scale=scale,
        )
    higher = _perturb(base, 1 + rating_dev, 1 - reviews_dev, scale)
    lower = _perturb(base, 1 - rating_dev, 1 + reviews_dev, scale)

    engine = ScoringEngine(params)
    result = ScenarioSet(
        current=ScenarioRow(ScenarioName.CURRENT, current, engine.score(current)),
        higher=ScenarioRow(ScenarioName.HIGHER, higher, engine.score(higher)),
        lower=ScenarioRow(ScenarioName.LOWER, lower, engine.score(lower)),
        deviation=deviation,
    )
    logger.info("scenario_calculated", **result.to_dict())
    return result
