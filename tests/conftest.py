"""Pytest fixtures and configuration."""
import os

import pytest

from rating_scorer.config import get_settings
from rating_scorer.models import RatingInput, ScenarioDeviation, ScoringParameters
from rating_scorer.scoring import ScoringEngine


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from RATING_SCORER_* variables and any local .env file."""
    for key in list(os.environ):
        if key.upper().startswith("RATING_SCORER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def default_params():
    """Calculator defaults: threshold 1, assumed average 3.5."""
    return ScoringParameters()


@pytest.fixture
def source_params():
    """Constants of the server-side calculators: threshold 5, prior 2.5."""
    return ScoringParameters(minimum_ratings_threshold=5, assumed_average=2.5)


@pytest.fixture
def engine(default_params):
    return ScoringEngine(default_params)


@pytest.fixture
def base_rating():
    return RatingInput(average_rating=4.5, rating_count=100)


@pytest.fixture
def default_deviation():
    return ScenarioDeviation(rating_deviation_percent=5, reviews_deviation_percent=30)


@pytest.fixture
def sample_items():
    """Items as a recalculation driver would receive them."""
    return [
        {"item_id": "espresso-machine", "average_rating": 4.6, "rating_count": 1250},
        {"item_id": "new-grinder", "average_rating": 5.0, "rating_count": 2},
        {"item_id": "kettle", "average_rating": 3.9, "rating_count": 340},
        {"item_id": "unrated-mug", "average_rating": 0.0, "rating_count": 0},
    ]
