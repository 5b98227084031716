"""Rating scorer: rank items by average rating and rating volume."""
from rating_scorer.models import (
    RatedItem,
    RatingInput,
    ScenarioDeviation,
    ScenarioName,
    ScoringMethod,
    ScoringParameters,
)
from rating_scorer.scoring import (
    BatchRecalculator,
    BatchReport,
    Extremes,
    InvalidParameterError,
    ScenarioRow,
    ScenarioSet,
    ScoreResult,
    ScoringEngine,
    VoteAggregate,
    WilsonInterval,
    aggregate_votes,
    bayesian_score,
    compute_scenario,
    find_extremes,
    weighted_score,
    wilson_interval,
    wilson_score,
    z_score_for_confidence,
)

__version__ = "1.0.0"

__all__ = [
    "RatingInput",
    "ScoringParameters",
    "ScenarioDeviation",
    "RatedItem",
    "ScoringMethod",
    "ScenarioName",
    "weighted_score",
    "bayesian_score",
    "wilson_score",
    "wilson_interval",
    "z_score_for_confidence",
    "WilsonInterval",
    "ScoreResult",
    "ScoringEngine",
    "ScenarioRow",
    "ScenarioSet",
    "compute_scenario",
    "Extremes",
    "find_extremes",
    "VoteAggregate",
    "aggregate_votes",
    "BatchRecalculator",
    "BatchReport",
    "InvalidParameterError",
]
