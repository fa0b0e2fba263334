"""
Flag Evaluator.

Identifies developers whose sessions show a concentration of negative
trends, excluding developers with a single session on record or whose
latest session in the period shows a notable improvement.
"""

import logging
from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Sequence

import config.settings as settings
from src.models.review import Category, EXCLUDED_TREND_LABELS, ReviewRecord
from src.utils.trends import tokenize_trends

logger = logging.getLogger(__name__)

# Receives the candidate list, returns an order-preserving subsequence of it
ConfirmFlags = Callable[[List[str]], Sequence[str]]


class FlagEvaluator:
    """
    Applies the negative-trend concentration rule.

    Flow:
    1. Score each record in the window (distinct non-excluded labels
       across all categories)
    2. Keep records scoring at least the threshold (raw candidates)
    3. Drop developers whose last window record shows an improvement
    4. Drop developers with exactly one record in the whole archive
    5. Deduplicate, keeping first-occurrence order

    Window and archive must be in ascending date order, since "last record"
    means most recent. Out-of-order input raises ValueError.
    """

    def __init__(
        self,
        threshold: int = settings.FLAG_THRESHOLD,
        excluded_labels: Optional[Iterable[str]] = None,
        improvement_label: str = settings.IMPROVEMENT_LABEL
    ):
        """
        Initialize flag evaluator.

        Args:
            threshold: Minimum negative-trend score for a raw candidate
            excluded_labels: Labels never counted as negative signal
            improvement_label: General-field label that clears a developer
        """
        self.threshold = threshold
        self.excluded_labels = (
            frozenset(excluded_labels) if excluded_labels is not None else EXCLUDED_TREND_LABELS
        )
        self.improvement_label = improvement_label

    def negative_trends(self, record: ReviewRecord, category: Category) -> int:
        """Distinct non-excluded trend labels in one category of one record."""
        labels = set(tokenize_trends(record.trends(category)))
        return len(labels - self.excluded_labels)

    def negative_trend_score(self, record: ReviewRecord) -> int:
        """Total negative-trend score of a record across all categories."""
        return sum(self.negative_trends(record, category) for category in Category)

    def is_raw_candidate(self, record: ReviewRecord) -> bool:
        return self.negative_trend_score(record) >= self.threshold

    def raw_candidates(self, window: Sequence[ReviewRecord]) -> List[ReviewRecord]:
        """Records in the window meeting the threshold, in window order."""
        return [record for record in window if self.is_raw_candidate(record)]

    def evaluate(
        self,
        window: Sequence[ReviewRecord],
        archive: Sequence[ReviewRecord]
    ) -> List[str]:
        """
        Compute the pre-confirmation flag list.

        Args:
            window: Records in the reporting period, oldest first
            archive: Every record in the export, oldest first

        Returns:
            Developer ids passing both exclusions, in first-occurrence order

        Raises:
            ValueError: If window or archive is not in ascending date order
        """
        _require_chronological(window, "window")
        _require_chronological(archive, "archive")

        candidates = self.raw_candidates(window)
        developer_ids = list(dict.fromkeys(record.developer_id for record in candidates))
        logger.info(
            f"{len(candidates)} raw candidate sessions from "
            f"{len(developer_ids)} developers (threshold {self.threshold})"
        )

        last_in_window = _last_records(window)
        improved = [
            developer_id
            for developer_id in developer_ids
            if self.improvement_label in last_in_window[developer_id].trends(Category.GENERAL)
        ]
        if improved:
            logger.info(f"Excluded after notable improvement: {', '.join(improved)}")

        archive_counts = Counter(record.developer_id for record in archive)
        single_session = [
            developer_id
            for developer_id in developer_ids
            if developer_id not in improved and archive_counts[developer_id] == 1
        ]
        if single_session:
            logger.info(f"Excluded with a single session on record: {', '.join(single_session)}")

        flags = [
            developer_id
            for developer_id in developer_ids
            if developer_id not in improved and developer_id not in single_session
        ]
        logger.info(f"{len(flags)} developers flagged before confirmation")
        return flags

    def flag(
        self,
        window: Sequence[ReviewRecord],
        archive: Sequence[ReviewRecord],
        confirm: ConfirmFlags
    ) -> List[str]:
        """
        Compute flags and pass them through the confirmation filter once.

        Raises:
            ValueError: If confirm returns anything but a subsequence of its input
        """
        candidates = self.evaluate(window, archive)
        confirmed = list(confirm(list(candidates)))

        if not _is_subsequence(confirmed, candidates):
            raise ValueError(
                f"Confirmation must return an order-preserving subsequence of "
                f"{candidates}, got {confirmed}"
            )

        rejected = len(candidates) - len(confirmed)
        if rejected:
            logger.info(f"{rejected} flags rejected during confirmation")
        return confirmed


def _last_records(records: Sequence[ReviewRecord]) -> Dict[str, ReviewRecord]:
    """Map each developer id to its last record in iteration order."""
    last = {}
    for record in records:
        last[record.developer_id] = record
    return last


def _require_chronological(records: Sequence[ReviewRecord], name: str) -> None:
    for previous, current in zip(records, records[1:]):
        if current.date < previous.date:
            raise ValueError(
                f"Records in the {name} must be sorted by date ascending: "
                f"{current.developer_id} at {current.date} follows {previous.date}"
            )


def _is_subsequence(candidate: Sequence[str], sequence: Sequence[str]) -> bool:
    remaining = iter(sequence)
    return all(any(item == other for other in remaining) for item in candidate)
