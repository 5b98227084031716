"""Highest / lowest score detection for display emphasis.

Scores are compared at display precision (2 decimals) so floating-point noise
is never reported as a real difference. When every rounded score is the same
there is no ranking signal and nothing is flagged.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import FrozenSet, Sequence

from rating_scorer.scoring.utils import DISPLAY_PLACES, InvalidParameterError, to_decimal

DEFAULT_TOLERANCE: float = 0.005


@dataclass(frozen=True)
class Extremes:
    """Indices attaining the rounded maximum and minimum."""

    max_indices: FrozenSet[int] = field(default_factory=frozenset)
    min_indices: FrozenSet[int] = field(default_factory=frozenset)

    def is_max(self, index: int) -> bool:
        return index in self.max_indices

    def is_min(self, index: int) -> bool:
        return index in self.min_indices

    def to_dict(self) -> dict:
        return {
            "max_indices": sorted(self.max_indices),
            "min_indices": sorted(self.min_indices),
        }


def find_extremes(
    scores: Sequence[float],
    tolerance: float = DEFAULT_TOLERANCE,
) -> Extremes:
    """Find the indices of the highest and lowest scores.

    Args:
        scores: Scores of one method across scenarios, in display order.
        tolerance: When the rounded spread is no wider than this, the scores
            are treated as all equal.

    Returns:
        Extremes; both sets are empty when all rounded scores tie (or fewer
        than two scores are given). Several indices may share the max or min.

    Raises:
        InvalidParameterError: If ``tolerance`` is negative.
    """
    if tolerance < 0:
        raise InvalidParameterError(f"tolerance must be >= 0, got {tolerance}")
    if len(scores) < 2:
        return Extremes()

    tol = Decimal(str(tolerance))
    rounded = [to_decimal(s, DISPLAY_PLACES) for s in scores]
    top = max(rounded)
    bottom = min(rounded)
    if top - bottom <= tol:
        return Extremes()

    # only indices that attain the rounded max/min; the sets stay disjoint
    return Extremes(
        max_indices=frozenset(i for i, r in enumerate(rounded) if r == top),
        min_indices=frozenset(i for i, r in enumerate(rounded) if r == bottom),
    )
