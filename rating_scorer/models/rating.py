"""Rating input and scoring parameter Pydantic models."""
from pydantic import BaseModel, ConfigDict, Field, model_validator


class RatingInput(BaseModel):
    """One item's observed rating data at a point in time."""
    model_config = ConfigDict(frozen=True)

    average_rating: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        description="Average rating on the rating scale (0-5 by default)",
    )
    rating_count: int = Field(..., ge=0, description="Number of ratings received")


class ScoringParameters(BaseModel):
    """Caller-supplied configuration for the scoring functions."""
    model_config = ConfigDict(frozen=True)

    minimum_ratings_threshold: int = Field(
        default=1,
        ge=1,
        description="Bayesian prior weight (m); how many ratings an item needs to pull away from the prior",
    )
    assumed_average: float = Field(
        default=3.5,
        ge=0,
        allow_inf_nan=False,
        description="Bayesian prior (C); the score of an item with no ratings",
    )
    confidence_z: float = Field(
        default=1.96,
        gt=0,
        allow_inf_nan=False,
        description="Normal quantile for the Wilson interval (1.96 = 95% two-sided)",
    )
    max_rating_scale: float = Field(
        default=5.0,
        gt=0,
        allow_inf_nan=False,
        description="Top of the rating scale",
    )

    @model_validator(mode="after")
    def check_assumed_average_on_scale(self) -> "ScoringParameters":
        """The prior must lie on the rating scale."""
        if self.assumed_average > self.max_rating_scale:
            raise ValueError(
                f"assumed_average {self.assumed_average} exceeds "
                f"max_rating_scale {self.max_rating_scale}"
            )
        return self


class ScenarioDeviation(BaseModel):
    """How far the comparison scenarios move away from the base input.

    Values are percentages. Anything finite is accepted; derived ratings and
    counts are clamped to their valid domains by the scenario calculator.
    """
    model_config = ConfigDict(frozen=True)

    rating_deviation_percent: float = Field(default=5.0, allow_inf_nan=False)
    reviews_deviation_percent: float = Field(default=30.0, allow_inf_nan=False)


class RatedItem(BaseModel):
    """An identified item handed to the batch recalculation driver."""
    item_id: str = Field(..., min_length=1)
    average_rating: float = Field(..., ge=0, allow_inf_nan=False)
    rating_count: int = Field(..., ge=0)

    def to_rating_input(self) -> RatingInput:
        return RatingInput(
            average_rating=self.average_rating,
            rating_count=self.rating_count,
        )
