"""Batch recalculation driver.

Scores many items with one method, in fixed-size chunks. A bad item is
recorded in the report and skipped; it never aborts the rest of the batch.
"""
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

import structlog

from rating_scorer.models.enums import ScoringMethod
from rating_scorer.models.rating import RatedItem
from rating_scorer.scoring.engine import ScoringEngine

logger = structlog.get_logger(__name__)

DEFAULT_BATCH_SIZE = 50

ItemLike = Union[RatedItem, Mapping[str, Any]]


@dataclass
class BatchReport:
    """Outcome of a recalculation run.

    ``processed`` and ``failed`` count items, not keys: an item whose id
    repeats an earlier one is stored under ``"<id>#<position>"``.
    """

    method:    ScoringMethod
    scores:    dict[str, float] = field(default_factory=dict)
    errors:    dict[str, str] = field(default_factory=dict)
    batches:   int = 0
    processed: int = 0
    failed:    int = 0

    def to_dict(self) -> dict:
        return {
            "method": self.method.value,
            "processed": self.processed,
            "failed": self.failed,
            "batches": self.batches,
            "scores": dict(self.scores),
            "errors": dict(self.errors),
        }


def _chunks(items: Iterable, size: int) -> Iterator[list]:
    it = iter(items)
    while True:
        chunk = list(islice(it, size))
        if not chunk:
            return
        yield chunk


def _item_id(item: ItemLike, position: int) -> str:
    if isinstance(item, RatedItem):
        return item.item_id
    if isinstance(item, Mapping) and item.get("item_id") not in (None, ""):
        return str(item["item_id"])
    return f"#{position}"


class BatchRecalculator:
    """Recalculate scores for a collection of rated items.

    Parameters
    ----------
    engine:
        Engine holding the scoring parameters.
    method:
        Method whose score is recorded for each item.
    batch_size:
        Items per chunk; values below 1 are raised to 1.
    """

    def __init__(
        self,
        engine: Optional[ScoringEngine] = None,
        method: ScoringMethod = ScoringMethod.BAYESIAN,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self.engine = engine or ScoringEngine()
        self.method = ScoringMethod(method)
        self.batch_size = max(1, int(batch_size))

    def _score_item(self, item: ItemLike) -> tuple[str, float]:
        rated = item if isinstance(item, RatedItem) else RatedItem.model_validate(item)
        return rated.item_id, self.engine.score_by_method(self.method, rated.to_rating_input())

    def recalculate(self, items: Iterable[ItemLike], limit: int = 0) -> BatchReport:
        """Score every item (or the first ``limit`` items when ``limit`` > 0).

        Items may be ``RatedItem`` instances or mappings with ``item_id``,
        ``average_rating`` and ``rating_count`` keys. Items that fail
        validation or scoring are listed in ``BatchReport.errors``.
        """
        if limit > 0:
            items = islice(items, limit)

        report = BatchReport(method=self.method)
        seen: set[str] = set()
        position = 0
        for chunk in _chunks(items, self.batch_size):
            report.batches += 1
            for item in chunk:
                position += 1
                try:
                    item_id, score = self._score_item(item)
                    error = None
                except ValueError as exc:
                    item_id, score = _item_id(item, position), None
                    error = str(exc)

                key = item_id
                if item_id in seen:
                    key = f"{item_id}#{position}"
                    logger.warning("duplicate_item_id", item_id=item_id, stored_as=key)
                seen.add(key)

                if error is not None:
                    report.errors[key] = error
                    report.failed += 1
                    logger.warning("item_scoring_failed", item_id=key, error=error)
                else:
                    report.scores[key] = score
                    report.processed += 1
            logger.info(
                "batch_processed",
                batch=report.batches,
                processed=report.processed,
                failed=report.failed,
            )

        logger.info(
            "recalculation_finished",
            method=self.method.value,
            processed=report.processed,
            failed=report.failed,
            batches=report.batches,
        )
        return report
