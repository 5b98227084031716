"""Wilson score interval lower bound.

Treats the average rating as an observed "success proportion" and ranks by
the lower bound of its confidence interval, so items with few ratings are
scored conservatively.

Formulas
--------
  p           = R / scale
  center      = p + z² / (2n)
  margin      = z × √((p(1 − p) + z² / (4n)) / n)
  denominator = 1 + z² / n

  lower = (center − margin) / denominator
  upper = (center + margin) / denominator

  z = standard normal quantile for (1 + confidence_level) / 2
      (fixed at 1.96 for 95% by default)

Both bounds are scaled back to [0, scale].
"""
import math
from dataclasses import dataclass

from rating_scorer.scoring.utils import (
    InvalidParameterError,
    clamp,
    require_count,
    require_rating,
)

DEFAULT_Z: float = 1.96
DEFAULT_SCALE: float = 5.0


def _erfinv(y: float) -> float:
    """Inverse of erf (solve erf(x) = y for x) using Newton-Raphson. No scipy."""
    if y <= -1.0 or y >= 1.0:
        raise ValueError("y must be in (-1, 1)")
    k = 2.0 / math.sqrt(math.pi)
    x = 0.0
    for _ in range(50):
        err = math.erf(x) - y
        if abs(err) < 1e-12:
            return x
        x = x - err / (k * math.exp(-x * x))
    return x


def z_score_for_confidence(confidence_level: float) -> float:
    """Two-sided standard normal quantile for a confidence level in (0, 1).

    z = Φ⁻¹((1 + level) / 2) = √2 × erfinv(level)

    ``z_score_for_confidence(0.95)`` is 1.95996..., which the default
    ``DEFAULT_Z`` rounds to 1.96.
    """
    if not 0.0 < confidence_level < 1.0:
        raise InvalidParameterError(
            f"confidence_level must be in (0, 1), got {confidence_level}"
        )
    return math.sqrt(2.0) * _erfinv(confidence_level)


@dataclass(frozen=True)
class WilsonInterval:
    """Wilson interval expressed on the rating scale."""

    lower:  float
    upper:  float
    center: float
    margin: float
    rating_count: int
    z: float

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def to_dict(self) -> dict:
        return {
            "lower": self.lower,
            "upper": self.upper,
            "center": self.center,
            "margin": self.margin,
            "width": self.width,
            "rating_count": self.rating_count,
            "z": self.z,
        }


def _validate(average_rating, rating_count, max_rating_scale, z):
    scale = require_rating(max_rating_scale, "max_rating_scale")
    if scale == 0:
        raise InvalidParameterError("max_rating_scale must be > 0")
    rating = require_rating(average_rating)
    if rating > scale:
        raise InvalidParameterError(
            f"average_rating {rating} exceeds max_rating_scale {scale}"
        )
    n = require_count(rating_count)
    z = require_rating(z, "z")
    if z == 0:
        raise InvalidParameterError("z must be > 0")
    return rating, n, scale, z


def wilson_interval(
    average_rating: float,
    rating_count: int,
    max_rating_scale: float = DEFAULT_SCALE,
    z: float = DEFAULT_Z,
) -> WilsonInterval:
    """Compute the full Wilson score interval for a rating.

    With no ratings the interval is undefined; it is reported as the whole
    scale (lower 0, upper ``max_rating_scale``).

    Raises:
        InvalidParameterError: If the rating is outside [0, max_rating_scale],
            the count is negative, or the scale / z is not positive.
    """
    rating, n, scale, z = _validate(average_rating, rating_count, max_rating_scale, z)

    if n == 0:
        return WilsonInterval(
            lower=0.0, upper=scale, center=0.0, margin=0.0, rating_count=0, z=z,
        )

    p = rating / scale
    z2 = z * z
    center = p + z2 / (2 * n)
    margin = z * math.sqrt((p * (1 - p) + z2 / (4 * n)) / n)
    denominator = 1 + z2 / n

    # Rounding near p = 0 can leave a tiny negative lower bound
    lower = clamp((center - margin) / denominator, 0.0, p)
    upper = clamp((center + margin) / denominator, p, 1.0)

    return WilsonInterval(
        lower=lower * scale,
        upper=upper * scale,
        center=center / denominator * scale,
        margin=margin / denominator * scale,
        rating_count=n,
        z=z,
    )


def wilson_score(
    average_rating: float,
    rating_count: int,
    max_rating_scale: float = DEFAULT_SCALE,
    z: float = DEFAULT_Z,
) -> float:
    """Lower bound of the Wilson score interval, on the rating scale.

    Returns exactly 0 when there are no ratings. The result never exceeds
    ``average_rating``.
    """
    rating, n, _, _ = _validate(average_rating, rating_count, max_rating_scale, z)
    if n == 0:
        return 0.0
    lower = wilson_interval(rating, n, max_rating_scale, z).lower
    return min(lower, rating)
