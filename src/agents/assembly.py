"""
Report Assembler.

Composes aggregation and flagging results with the externally supplied
period bounds, cancellation count and confirmation filter.
"""

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

import config.settings as settings
from src.agents.aggregation import FrequencyAggregator
from src.agents.flagging import ConfirmFlags, FlagEvaluator
from src.models.report import Report
from src.models.review import Category, ReviewRecord

logger = logging.getLogger(__name__)


class ReportAssembler:
    """
    Builds the immutable Report for one period.

    The cancellation count is not derived from the records. It is merged
    into the General frequency mapping under the "Cancellations" key so it
    is reported alongside the General trends.
    """

    def __init__(
        self,
        aggregator: Optional[FrequencyAggregator] = None,
        evaluator: Optional[FlagEvaluator] = None
    ):
        self.aggregator = aggregator or FrequencyAggregator()
        self.evaluator = evaluator or FlagEvaluator()

    def assemble(
        self,
        window: Sequence[ReviewRecord],
        archive: Sequence[ReviewRecord],
        start: datetime,
        end: datetime,
        cancellations: Callable[[], int],
        confirm: ConfirmFlags
    ) -> Report:
        """
        Assemble the report.

        Args:
            window: Records dated within [start, end), oldest first
            archive: Every record in the export, oldest first
            start: Period start (inclusive)
            end: Period end (exclusive)
            cancellations: Source of the period's cancellation count, called once
            confirm: Confirmation filter for flag candidates, called once

        Returns:
            Report for the period

        Raises:
            ValueError: If the period is empty or the cancellation count is invalid
        """
        if start >= end:
            raise ValueError(f"Period start {start} must be before end {end}")

        logger.info(f"Assembling report for {len(window)} reviews from {start} to {end}")

        trends = self.aggregator.all_categories(window)

        cancellation_count = cancellations()
        if isinstance(cancellation_count, bool) or not isinstance(cancellation_count, int) \
                or cancellation_count < 0:
            raise ValueError(
                f"Cancellation count must be a non-negative integer, got {cancellation_count!r}"
            )
        trends[Category.GENERAL][settings.CANCELLATIONS_LABEL] = cancellation_count

        flags = self.evaluator.flag(window, archive, confirm)

        report = Report(
            start=start,
            end=end,
            total_reviews=len(window),
            trends=trends,
            weeks=self.aggregator.week_frequency(window),
            surprises=tuple(self.aggregator.surprise_entries(window)),
            flags=tuple(flags)
        )

        logger.info(
            f"Report assembled: {report.total_reviews} reviews, "
            f"{len(report.surprises)} surprises, {len(report.flags)} flags"
        )
        return report
