"""rating-scorer command line.

Commands
--------
  recalculate INPUT   Score every item in a JSON file with one method
  compare             Print the what-if comparison table for one rating
  settings            Print the resolved configuration

Usage
-----
    rating-scorer recalculate items.json --method wilson --output scores.json
    rating-scorer compare --rating 4.5 --count 100 --reviews-deviation 30
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError

from rating_scorer.config import Settings, get_settings
from rating_scorer.models.enums import SCENARIO_LABELS, ScoringMethod
from rating_scorer.models.rating import RatingInput, ScenarioDeviation
from rating_scorer.scoring.batch import BatchRecalculator, BatchReport
from rating_scorer.scoring.engine import ScoringEngine
from rating_scorer.scoring.scenario import ScenarioSet
from rating_scorer.scoring.utils import round_display

log = structlog.get_logger("rating_scorer.cli")

HIGHEST_MARK = "★"


def configure_logging(level: str = "INFO") -> None:
    """Route structlog through stdlib logging with a console renderer on stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def _engine_for(args: argparse.Namespace, settings: Settings) -> ScoringEngine:
    """Settings-derived parameters with command-line overrides applied."""
    overrides = {}
    if args.threshold is not None:
        overrides["minimum_ratings_threshold"] = args.threshold
    if args.assumed_average is not None:
        overrides["assumed_average"] = args.assumed_average
    params = settings.scoring_parameters()
    if overrides:
        params = params.model_validate({**params.model_dump(), **overrides})
    return ScoringEngine(params)


def _load_items(path: Path) -> list:
    """Read items from a JSON list, or an object with an ``items`` list."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of items")
    return data


# ── output ────────────────────────────────────────────────────────────────────

def _print_report(report: BatchReport) -> None:
    """Pretty-print recalculated scores and per-item failures."""
    header = f"{'Item':<24}  {report.method.value.capitalize():>10}"
    print("\n" + "=" * len(header))
    print(header)
    print("=" * len(header))
    for item_id, score in report.scores.items():
        print(f"{item_id[:24]:<24}  {score:>10.2f}")
    print("=" * len(header))
    for item_id, error in report.errors.items():
        print(f"ERROR {item_id}: {error}")
    print(
        f"Processed {report.processed} item(s) in {report.batches} batch(es), "
        f"{report.failed} failed."
    )


def _format_score(value: float, highest: bool) -> str:
    text = f"{round_display(value):.2f}"
    return f"{HIGHEST_MARK} {text}" if highest else text


def _print_scenarios(scenarios: ScenarioSet, threshold: int, assumed_average: float) -> None:
    """Pretty-print the impact table, marking the highest score per method."""
    extremes = scenarios.extremes()
    header = (
        f"{'Scenario':<15}  {'Rating':>7}  {'Reviews':>7}  "
        f"{'Weighted':>9}  {'Bayesian':>9}  {'Wilson':>9}"
    )
    print("\n" + "=" * len(header))
    print(header)
    print("=" * len(header))
    for index, row in enumerate(scenarios.rows()):
        cells = [
            _format_score(row.scores.get(method), extremes[method].is_max(index))
            for method in ScoringMethod
        ]
        print(
            f"{SCENARIO_LABELS[row.name]:<15}  "
            f"{round_display(row.rating.average_rating):>7.2f}  "
            f"{row.rating.rating_count:>7}  "
            + "  ".join(f"{c:>9}" for c in cells)
        )
    print("=" * len(header))
    dev = scenarios.deviation
    print(
        f"Higher Rating: +{dev.rating_deviation_percent:g}% rating, "
        f"-{dev.reviews_deviation_percent:g}% reviews"
    )
    print(
        f"More Reviews:  -{dev.rating_deviation_percent:g}% rating, "
        f"+{dev.reviews_deviation_percent:g}% reviews"
    )
    print(f"Min. ratings threshold: {threshold}  Assumed average: {assumed_average:.1f}")
    print(f"{HIGHEST_MARK} = highest score in that method column")


# ── commands ──────────────────────────────────────────────────────────────────

def cmd_recalculate(args: argparse.Namespace, settings: Settings) -> int:
    try:
        items = _load_items(args.input)
        engine = _engine_for(args, settings)
    except (OSError, ValueError) as exc:
        log.error("recalculation_aborted", error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 2

    recalculator = BatchRecalculator(
        engine=engine,
        method=args.method or settings.default_method,
        batch_size=args.batch_size or settings.batch_size,
    )
    log.info("recalculation_started", items=len(items), method=recalculator.method.value)
    report = recalculator.recalculate(items, limit=args.limit)
    _print_report(report)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        log.info("results_written", path=str(args.output))
    return 0


def cmd_compare(args: argparse.Namespace, settings: Settings) -> int:
    try:
        engine = _engine_for(args, settings)
        rating = RatingInput(
            average_rating=settings.default_rating if args.rating is None else args.rating,
            rating_count=settings.default_num_ratings if args.count is None else args.count,
        )
        defaults = settings.scenario_deviation()
        deviation = ScenarioDeviation(
            rating_deviation_percent=(
                defaults.rating_deviation_percent
                if args.rating_deviation is None else args.rating_deviation
            ),
            reviews_deviation_percent=(
                defaults.reviews_deviation_percent
                if args.reviews_deviation is None else args.reviews_deviation
            ),
        )
    except ValidationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    scenarios = engine.compare(rating, deviation)
    _print_scenarios(
        scenarios,
        engine.params.minimum_ratings_threshold,
        engine.params.assumed_average,
    )
    return 0


def cmd_settings(args: argparse.Namespace, settings: Settings) -> int:
    print(json.dumps(settings.model_dump(mode="json"), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rating-scorer",
        description="Rank items by average rating and number of ratings",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_param_overrides(p: argparse.ArgumentParser) -> None:
        p.add_argument("--threshold", type=int, help="Bayesian minimum ratings threshold")
        p.add_argument("--assumed-average", type=float, help="Bayesian assumed average")

    recalc = sub.add_parser("recalculate", help="Score every item in a JSON file")
    recalc.add_argument("input", type=Path, help="JSON list of {item_id, average_rating, rating_count}")
    recalc.add_argument(
        "--method",
        type=ScoringMethod,
        choices=list(ScoringMethod),
        help="Scoring method (default from settings)",
    )
    recalc.add_argument("--batch-size", type=int, help="Items per batch")
    recalc.add_argument("--limit", type=int, default=0, help="Only process the first N items")
    recalc.add_argument("--output", type=Path, help="Write the JSON report here")
    add_param_overrides(recalc)
    recalc.set_defaults(func=cmd_recalculate)

    compare = sub.add_parser("compare", help="Print the what-if comparison table")
    compare.add_argument("--rating", type=float, help="Average rating")
    compare.add_argument("--count", type=int, help="Number of ratings")
    compare.add_argument("--rating-deviation", type=float, help="Rating deviation (%%)")
    compare.add_argument("--reviews-deviation", type=float, help="Reviews deviation (%%)")
    add_param_overrides(compare)
    compare.set_defaults(func=cmd_compare)

    show = sub.add_parser("settings", help="Print the resolved configuration")
    show.set_defaults(func=cmd_settings)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
