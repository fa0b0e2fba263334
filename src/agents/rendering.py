"""
Report Renderer.

Formats a Report as the plain-text trend report.
"""

from datetime import datetime
from typing import Iterable, Mapping

import config.settings as settings
from src.models.report import Report
from src.models.review import Category


class ReportRenderer:
    """
    Renders the report sections in a fixed order, separated by blank lines:
    title, review total, frequency tables (General, TDD, Requirements-
    gathering, Debugging, weeks), surprises and flags.
    Frequency tables are sorted by label.
    """

    def render(self, report: Report) -> str:
        sections = [
            self._title(report.start, report.end),
            self._frequency(settings.REVIEW_TOTAL_LABEL, report.total_reviews),
            f"{settings.FREQUENCY_HEADER}:\n",
        ]
        sections.extend(
            self._table(category.header, report.trends[category]) for category in Category
        )
        sections.append(self._table(settings.WEEK_HEADER, report.weeks))
        sections.append(self._listing(settings.SURPRISES_HEADER, report.surprises))
        sections.append(self._listing(settings.FLAGS_HEADER, report.flags))
        return "\n".join(sections) + "\n"

    def _title(self, start: datetime, end: datetime) -> str:
        return f"Trend report for period: {format_title_date(start)} - {format_title_date(end)}\n"

    def _frequency(self, label: str, count: int) -> str:
        return f"{label}: {count}\n"

    def _table(self, header: str, frequencies: Mapping[str, int]) -> str:
        rows = "".join(self._frequency(label, frequencies[label]) for label in sorted(frequencies))
        return f"{header}:\n{rows}"

    def _listing(self, header: str, entries: Iterable[str]) -> str:
        rows = "".join(f"{entry}\n" for entry in entries)
        return f"{header}:\n{rows}"


def format_title_date(value: datetime) -> str:
    """Format a date as d MMM yyyy (e.g. 3 Feb 2021)."""
    return settings.TITLE_DATE_FORMAT.format(
        day=value.day,
        month=value.strftime("%b"),
        year=value.year
    )
