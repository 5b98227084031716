"""Pydantic models and enums for the rating scorer."""

from rating_scorer.models.enums import (
    SCENARIO_LABELS,
    ScenarioName,
    ScoringMethod,
)
from rating_scorer.models.rating import (
    RatedItem,
    RatingInput,
    ScenarioDeviation,
    ScoringParameters,
)

__all__ = [
    # Enums
    "ScoringMethod",
    "ScenarioName",
    "SCENARIO_LABELS",
    # Rating models
    "RatingInput",
    "ScoringParameters",
    "ScenarioDeviation",
    "RatedItem",
]
