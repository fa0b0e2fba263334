"""
Review record data model.

Represents one peer-review session row from the export, plus the fixed
vocabulary of trend categories.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict

import config.settings as settings


class Category(Enum):
    """The four process-trend dimensions recorded for every session."""

    GENERAL = "General"
    TDD = "TDD"
    REQUIREMENTS_GATHERING = "RequirementsGathering"
    DEBUGGING = "Debugging"

    @property
    def field_name(self) -> str:
        return _FIELD_NAMES[self]

    @property
    def column(self) -> str:
        """Export column holding this category's comma-separated trends."""
        return settings.trends_column(self.field_name)

    @property
    def header(self) -> str:
        """Section title used when rendering the report."""
        if self is Category.GENERAL:
            return settings.GENERAL_HEADER
        return self.field_name


_FIELD_NAMES = {
    Category.GENERAL: settings.GENERAL_FIELD,
    Category.TDD: settings.TDD_FIELD,
    Category.REQUIREMENTS_GATHERING: settings.REQUIREMENTS_FIELD,
    Category.DEBUGGING: settings.DEBUGGING_FIELD,
}

# Labels that are never negative signal when scoring a session
EXCLUDED_TREND_LABELS = frozenset(settings.EXCLUDED_TREND_LABELS)


@dataclass(frozen=True)
class ReviewRecord:
    """
    One review session.

    category_trends holds the raw, unsplit field for each Category.
    """
    developer_id: str
    date: datetime
    week_label: str
    category_trends: Dict[Category, str] = field(default_factory=dict)
    surprise_text: str = ""

    def trends(self, category: Category) -> str:
        """
        Raw trend field for a category.

        Raises:
            KeyError: If the record has no field for the category
        """
        return self.category_trends[category]
