"""Weighted (logarithmic) score.

Formula
-------
  Weighted = R × log10(n + 1)

  R = average rating, n = number of ratings.

Zero-volume items always score 0 (log10(1) = 0). The score grows without
bound as volume grows, so it favours popular items over well-rated niche ones.
"""
import math

from rating_scorer.scoring.utils import require_count, require_rating


def weighted_score(average_rating: float, rating_count: int) -> float:
    """Weight the average rating by the decimal logarithm of the rating volume.

    No upper bound is enforced on ``average_rating``; callers clamp to the
    rating scale upstream.

    Raises:
        InvalidParameterError: On a negative or non-finite rating, or a
            negative / fractional count.
    """
    rating = require_rating(average_rating)
    n = require_count(rating_count)
    if n == 0:
        return 0.0
    return rating * math.log10(n + 1)
