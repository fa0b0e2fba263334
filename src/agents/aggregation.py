"""
Trend Frequency Aggregator.

Counts trend labels, week labels and surprise entries across a collection
of review records.
"""

import logging
from typing import Dict, List, Sequence

from src.models.review import Category, ReviewRecord
from src.utils.trends import count_labels, tokenize_trends

logger = logging.getLogger(__name__)


class FrequencyAggregator:
    """
    Builds label -> count histograms over review records.

    All counting goes through tokenize_trends, so a label counted here is
    counted the same way by the flag evaluator. Labels that never occur are
    absent from the result rather than zero-filled.
    """

    def category_frequency(
        self,
        category: Category,
        records: Sequence[ReviewRecord]
    ) -> Dict[str, int]:
        """
        Count every trend label in a category across all records.

        Args:
            category: Category whose field is tokenized
            records: Records to aggregate (typically the window)

        Returns:
            Mapping of trend label to occurrence count (no exclusions)
        """
        labels = [
            label
            for record in records
            for label in tokenize_trends(record.trends(category))
        ]
        counts = count_labels(labels)

        logger.debug(
            f"{category.value}: {len(counts)} distinct trends "
            f"({len(labels)} occurrences over {len(records)} records)"
        )
        return counts

    def label_occurrence(
        self,
        category: Category,
        label: str,
        records: Sequence[ReviewRecord]
    ) -> int:
        """
        Count records whose raw category field contains a label.

        This is a substring match on the unsplit field, looser than the
        token equality used by category_frequency.
        """
        return sum(1 for record in records if label in record.trends(category))

    def week_frequency(self, records: Sequence[ReviewRecord]) -> Dict[str, int]:
        """Count records per week label, each label taken whole."""
        return count_labels(record.week_label for record in records)

    def surprise_entries(self, records: Sequence[ReviewRecord]) -> List[str]:
        """Collect non-blank surprise texts in record order, keeping duplicates."""
        return [
            record.surprise_text
            for record in records
            if record.surprise_text and record.surprise_text.strip()
        ]

    def all_categories(self, records: Sequence[ReviewRecord]) -> Dict[Category, Dict[str, int]]:
        """Run category_frequency once per category."""
        return {category: self.category_frequency(category, records) for category in Category}
