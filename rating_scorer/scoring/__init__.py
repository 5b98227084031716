"""Scoring module for the rating scorer.

Implements the three ranking methods and the comparison helpers built on them:
  Weighted (log-volume) · Bayesian average · Wilson lower bound
  → Scenario comparison → Extremes highlighting → Batch recalculation
"""
from rating_scorer.scoring.batch import BatchRecalculator, BatchReport
from rating_scorer.scoring.bayesian import bayesian_score
from rating_scorer.scoring.engine import ScoreResult, ScoringEngine
from rating_scorer.scoring.extremes import Extremes, find_extremes
from rating_scorer.scoring.scenario import ScenarioRow, ScenarioSet, compute_scenario
from rating_scorer.scoring.utils import InvalidParameterError
from rating_scorer.scoring.votes import VoteAggregate, aggregate_votes
from rating_scorer.scoring.weighted import weighted_score
from rating_scorer.scoring.wilson import (
    WilsonInterval,
    wilson_interval,
    wilson_score,
    z_score_for_confidence,
)

__all__ = [
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
