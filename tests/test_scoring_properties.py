"""Property-based tests for the scoring functions.

Uses Hypothesis to verify:
  1. zero-volume behaviour of all three methods
  2. Wilson lower bound never exceeds the raw rating
  3. Bayesian monotonicity in rating count and threshold
  4. Wilson monotonicity in rating count
  5. scenario rows always stay on the rating scale
  6. determinism of every scoring function
"""
import pytest
from hypothesis import HealthCheck, assume, given, settings as h_settings
from hypothesis import strategies as st

from rating_scorer.models import RatingInput, ScenarioDeviation, ScoringParameters
from rating_scorer.scoring import (
    ScoringEngine,
    bayesian_score,
    compute_scenario,
    find_extremes,
    weighted_score,
    wilson_score,
)
from rating_scorer.scoring.utils import round_display

# ── Hypothesis configuration ──────────────────────────────────────────────────
h_settings.register_profile(
    "ci",
    max_examples=500,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
h_settings.load_profile("ci")


# ── Strategy helpers ──────────────────────────────────────────────────────────

_rating = st.floats(min_value=0.0, max_value=5.0, allow_nan=False)
_count = st.integers(min_value=0, max_value=100_000)
_positive_count = st.integers(min_value=1, max_value=100_000)
_threshold = st.integers(min_value=1, max_value=100)
_deviation = st.floats(min_value=-1000.0, max_value=1000.0, allow_nan=False)


# ── Zero-volume behaviour ─────────────────────────────────────────────────────

class TestZeroRatings:
    """With no ratings each method falls back to its defined value."""

    @given(r=st.floats(min_value=0.0, max_value=1e6, allow_nan=False))
    def test_weighted_zero(self, r):
        assert weighted_score(r, 0) == 0

    @given(r=_rating, t=_threshold, a=_rating)
    def test_bayesian_returns_prior(self, r, t, a):
        assert bayesian_score(r, 0, t, a) == a

    @given(r=_rating)
    def test_wilson_zero(self, r):
        assert wilson_score(r, 0) == 0


# ── Bounds ────────────────────────────────────────────────────────────────────

class TestBounds:
    """Scores stay inside their documented ranges."""

    @given(r=_rating, n=_positive_count)
    def test_wilson_never_exceeds_rating(self, r, n):
        score = wilson_score(r, n)
        assert 0 <= score <= r, f"wilson({r}, {n})={score} outside [0, {r}]"

    @given(r=_rating, n=_count, t=_threshold, a=_rating)
    def test_bayesian_between_rating_and_prior(self, r, n, t, a):
        score = bayesian_score(r, n, t, a)
        assert min(r, a) - 1e-9 <= score <= max(r, a) + 1e-9

    @given(r=_rating, n=_count)
    def test_weighted_non_negative(self, r, n):
        assert weighted_score(r, n) >= 0


# ── Monotonicity ──────────────────────────────────────────────────────────────

class TestMonotonicity:
    """More ratings move scores the documented way."""

    @given(
        r=_rating,
        a=_rating,
        n1=st.integers(min_value=0, max_value=5_000),
        delta=st.integers(min_value=1, max_value=5_000),
        t=_threshold,
    )
    @h_settings(max_examples=300)
    def test_bayesian_increases_with_count(self, r, a, n1, delta, t):
        """For r > a, more ratings strictly raise the Bayesian score."""
        assume(r - a >= 0.01)
        assert bayesian_score(r, n1, t, a) < bayesian_score(r, n1 + delta, t, a)

    @given(
        r=_rating,
        a=_rating,
        n=st.integers(min_value=1, max_value=5_000),
        t1=_threshold,
        extra=st.integers(min_value=1, max_value=100),
    )
    @h_settings(max_examples=300)
    def test_bayesian_threshold_pulls_towards_prior(self, r, a, n, t1, extra):
        """A larger threshold never moves the score away from the prior."""
        low = bayesian_score(r, n, t1, a)
        high = bayesian_score(r, n, t1 + extra, a)
        assert abs(high - a) <= abs(low - a) + 1e-12

    @given(
        r=_rating,
        n1=st.integers(min_value=1, max_value=5_000),
        delta=st.integers(min_value=1, max_value=5_000),
    )
    @h_settings(max_examples=300)
    def test_wilson_non_decreasing_in_count(self, r, n1, delta):
        assert wilson_score(r, n1) <= wilson_score(r, n1 + delta) + 1e-12


# ── Scenarios ─────────────────────────────────────────────────────────────────

class TestScenarioProperties:
    """Any deviation yields scenario rows on the valid domain."""

    params = ScoringParameters()

    @given(r=_rating, n=st.integers(min_value=0, max_value=10_000), dr=_deviation, dc=_deviation)
    @h_settings(max_examples=300)
    def test_rows_clamped(self, r, n, dr, dc):
        scenarios = compute_scenario(
            RatingInput(average_rating=r, rating_count=n),
            self.params,
            ScenarioDeviation(rating_deviation_percent=dr, reviews_deviation_percent=dc),
        )
        for row in scenarios.rows():
            assert 0 <= row.rating.average_rating <= self.params.max_rating_scale
            assert row.rating.rating_count >= 0
            assert 0 <= row.scores.wilson <= self.params.max_rating_scale
            assert 0 <= row.scores.bayesian <= self.params.max_rating_scale


# ── Extremes ──────────────────────────────────────────────────────────────────

class TestExtremesProperties:

    @given(x=st.floats(min_value=0.0, max_value=100.0, allow_nan=False),
           size=st.integers(min_value=1, max_value=6))
    def test_all_tied_flags_nothing(self, x, size):
        result = find_extremes([x] * size)
        assert result.max_indices == frozenset()
        assert result.min_indices == frozenset()

    @given(
        scores=st.lists(
            st.floats(min_value=0.0, max_value=100.0, allow_nan=False),
            min_size=2, max_size=6,
        ),
        tolerance=st.floats(min_value=0.0, max_value=5.0, allow_nan=False),
    )
    def test_max_and_min_disjoint_or_empty(self, scores, tolerance):
        result = find_extremes(scores, tolerance=tolerance)
        assert result.max_indices.isdisjoint(result.min_indices)
        assert bool(result.max_indices) == bool(result.min_indices)

    @given(scores=st.lists(
        st.floats(min_value=0.0, max_value=100.0, allow_nan=False),
        min_size=2, max_size=6,
    ))
    def test_flagged_indices_share_rounded_value(self, scores):
        rounded = [round_display(s) for s in scores]
        result = find_extremes(scores)
        assert {rounded[i] for i in result.max_indices} <= {max(rounded)}
        assert {rounded[i] for i in result.min_indices} <= {min(rounded)}


# ── Determinism ───────────────────────────────────────────────────────────────

class TestDeterminism:

    engine = ScoringEngine(ScoringParameters(minimum_ratings_threshold=10))

    @given(r=_rating, n=_count)
    @h_settings(max_examples=200)
    def test_identical_inputs_identical_outputs(self, r, n):
        rating = RatingInput(average_rating=r, rating_count=n)
        assert self.engine.score(rating) == self.engine.score(rating)
        assert wilson_score(r, n) == wilson_score(r, n)
        assert weighted_score(r, n) == weighted_score(r, n)
