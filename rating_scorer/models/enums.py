"""Enumeration types for the rating scorer."""
from enum import Enum


class ScoringMethod(str, Enum):
    """The three ranking algorithms the engine implements."""
    WEIGHTED = "weighted"  # rating × log10(count + 1)
    BAYESIAN = "bayesian"  # shrinkage towards an assumed average
    WILSON = "wilson"  # Wilson score interval lower bound


class ScenarioName(str, Enum):
    """Rows of the what-if comparison, in display order."""
    CURRENT = "current"
    HIGHER = "higher"  # higher rating, fewer reviews
    LOWER = "lower"  # lower rating, more reviews


# Human-readable labels used when rendering comparison tables
SCENARIO_LABELS: dict[ScenarioName, str] = {
    ScenarioName.CURRENT: "Current Input",
    ScenarioName.HIGHER: "Higher Rating",
    ScenarioName.LOWER: "More Reviews",
}
