"""Aggregate individual votes into the (average, count) pair the engine scores.

Vote stores often record values on their own scale, e.g. star widgets that
save percentages (0-100). ``value_scale`` maps those onto the rating scale
before averaging.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

import structlog

from rating_scorer.models.rating import RatingInput
from rating_scorer.scoring.utils import InvalidParameterError, require_rating

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class VoteAggregate:
    """Summary of an item's votes, on the rating scale."""

    average:    float
    count:      int
    total:      float
    percentage: float   # average as a percentage of the rating scale

    def to_rating_input(self) -> RatingInput:
        return RatingInput(average_rating=self.average, rating_count=self.count)

    def to_dict(self) -> dict:
        return {
            "average": self.average,
            "count": self.count,
            "total": self.total,
            "percentage": self.percentage,
        }


def aggregate_votes(
    values: Iterable[float],
    max_rating_scale: float = 5.0,
    value_scale: Optional[float] = None,
) -> VoteAggregate:
    """Average raw vote values.

    Args:
        values: Individual vote values.
        max_rating_scale: Top of the rating scale the result is expressed on.
        value_scale: Top of the scale the votes were recorded on. Defaults to
            ``max_rating_scale`` (no rescaling).

    Returns:
        VoteAggregate; all zeros when there are no votes.

    Raises:
        InvalidParameterError: If a vote is negative, non-finite or above
            ``value_scale``, or a scale is not positive.
    """
    scale = require_rating(max_rating_scale, "max_rating_scale")
    source_scale = scale if value_scale is None else require_rating(value_scale, "value_scale")
    if scale == 0 or source_scale == 0:
        raise InvalidParameterError("rating scales must be > 0")

    factor = scale / source_scale
    total = 0.0
    count = 0
    for raw in values:
        vote = require_rating(raw, "vote")
        if vote > source_scale:
            raise InvalidParameterError(f"vote {vote} exceeds scale {source_scale}")
        total += vote * factor
        count += 1

    if count == 0:
        return VoteAggregate(average=0.0, count=0, total=0.0, percentage=0.0)

    average = min(total / count, scale)
    aggregate = VoteAggregate(
        average=average,
        count=count,
        total=total,
        percentage=average / scale * 100,
    )
    logger.debug("votes_aggregated", **aggregate.to_dict())
    return aggregate
