"""Bayesian average (shrinkage estimator).

Formula
-------
  Bayesian = (n / (n + m)) × R + (m / (n + m)) × C

  R = observed average rating
  n = number of ratings
  m = minimum ratings threshold (prior weight, ≥ 1)
  C = assumed average (prior)

The two weights sum to 1, so the result always lies between R and C. With no
ratings the result is exactly C; as n grows it converges on R.
"""
from rating_scorer.scoring.utils import require_count, require_rating


def bayesian_score(
    average_rating: float,
    rating_count: int,
    minimum_threshold: int,
    assumed_average: float,
) -> float:
    """Blend the observed average with the assumed average, weighted by volume.

    Args:
        average_rating: Observed average rating R.
        rating_count: Number of ratings n.
        minimum_threshold: Prior weight m; must be at least 1.
        assumed_average: Prior C.

    Returns:
        The Bayesian average.

    Raises:
        InvalidParameterError: If ``minimum_threshold`` < 1 or any input is
            negative / non-finite.
    """
    rating = require_rating(average_rating)
    n = require_count(rating_count)
    m = require_count(minimum_threshold, "minimum_threshold", minimum=1)
    prior = require_rating(assumed_average, "assumed_average")

    if n == 0:
        return prior

    total = n + m
    return (n / total) * rating + (m / total) * prior
