"""Configuration management using Pydantic Settings."""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from rating_scorer.models.enums import ScoringMethod
from rating_scorer.models.rating import ScenarioDeviation, ScoringParameters
from rating_scorer.scoring.wilson import z_score_for_confidence


class Settings(BaseSettings):
    """Scoring defaults loaded from RATING_SCORER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RATING_SCORER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Rating Scorer"
    log_level: str = "INFO"

    # Bayesian
    bayesian_assumed_average: float = Field(default=3.5, ge=0)
    default_minimum_ratings: int = Field(default=1, ge=1)

    # Calculator defaults
    default_rating: float = Field(default=4.5, ge=0)
    default_num_ratings: int = Field(default=100, ge=0)
    default_method: ScoringMethod = ScoringMethod.BAYESIAN

    # Scenario deviations (%)
    scenario_rating_deviation: float = 5.0
    scenario_reviews_deviation: float = 30.0

    # Scale and Wilson confidence
    max_rating_scale: float = Field(default=5.0, gt=0)
    wilson_z: float = Field(default=1.96, gt=0)
    # When set (e.g. 0.90), overrides wilson_z with the matching normal quantile
    wilson_confidence_level: Optional[float] = Field(default=None, gt=0, lt=1)

    # Batch recalculation
    batch_size: int = Field(default=50, ge=1)

    @property
    def confidence_z(self) -> float:
        if self.wilson_confidence_level is not None:
            return z_score_for_confidence(self.wilson_confidence_level)
        return self.wilson_z

    def scoring_parameters(self) -> ScoringParameters:
        return ScoringParameters(
            minimum_ratings_threshold=self.default_minimum_ratings,
            assumed_average=self.bayesian_assumed_average,
            confidence_z=self.confidence_z,
            max_rating_scale=self.max_rating_scale,
        )

    def scenario_deviation(self) -> ScenarioDeviation:
        return ScenarioDeviation(
            rating_deviation_percent=self.scenario_rating_deviation,
            reviews_deviation_percent=self.scenario_reviews_deviation,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
