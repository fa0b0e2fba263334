"""
Configuration settings for the review trend report.

Centralized configuration for export columns, formats, trend vocabulary
and report headers.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_ROOT = Path(os.getenv("TREND_REPORT_OUTPUT", str(PROJECT_ROOT / "output")))

# Export columns
DATE_COLUMN = "Date"
DEVELOPER_COLUMN = "Review"  # Developer UUID
WEEK_COLUMN = "Week (from Review)"

GENERAL_FIELD = "General aspects about the review"
TDD_FIELD = "TDD process"
REQUIREMENTS_FIELD = "Requirements-gathering process"
DEBUGGING_FIELD = "Debugging process"
SURPRISES_FIELD = "New trend or surprising behaviour"


def trends_column(field_name: str) -> str:
    """Name of the export column holding the trends for a review field."""
    return f"Trends - {field_name}"


SURPRISES_COLUMN = trends_column(SURPRISES_FIELD)

# Formats (en-GB)
EXPORT_DATETIME_FORMAT = "%d/%m/%Y %I:%M%p"  # d/M/yyyy h:mmtt
INPUT_DATE_FORMAT = "%d/%m/%Y"  # d/M/yyyy
TITLE_DATE_FORMAT = "{day} {month} {year}"  # d MMM yyyy

# Trend vocabulary
CANCELLATIONS_LABEL = "Cancellations"
IMPROVEMENT_LABEL = "Notable improvement between sessions"
EXCLUDED_TREND_LABELS = (
    "No-show",
    "No UUID provided",
    IMPROVEMENT_LABEL,
    "UUID error",
)
FLAG_THRESHOLD = 4  # Minimum negative trends for a raw candidate

# Report headers
REVIEW_TOTAL_LABEL = "Total reviews during this period"
FREQUENCY_HEADER = "Trends frequency"
GENERAL_HEADER = "General"
WEEK_HEADER = "Review weeks"
SURPRISES_HEADER = "Surprising behaviour"
FLAGS_HEADER = (
    f"Devs flagged for attention (with at least {FLAG_THRESHOLD} "
    "negative trends and no notable improvement)"
)

# Logging
LOG_LEVEL = os.getenv("TREND_REPORT_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "trend_report.log"
