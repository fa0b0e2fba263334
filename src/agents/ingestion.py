"""
Export Loader.

Reads the review-session CSV export into ReviewRecord objects and selects
the records that fall in a reporting period.
"""

import logging
from datetime import datetime
from typing import List, Sequence

import pandas as pd

import config.settings as settings
from src.models.review import Category, ReviewRecord

logger = logging.getLogger(__name__)


REQUIRED_COLUMNS = [
    settings.DATE_COLUMN,
    settings.DEVELOPER_COLUMN,
    settings.WEEK_COLUMN,
    settings.SURPRISES_COLUMN,
] + [category.column for category in Category]


class ExportLoader:
    """
    Loads the review export.

    Every cell is read as text with blanks kept as empty strings. The
    archive is returned sorted by date (stable), because flagging relies on
    "last record for a developer" meaning the most recent one.
    """

    def __init__(self, datetime_format: str = settings.EXPORT_DATETIME_FORMAT):
        """
        Initialize export loader.

        Args:
            datetime_format: strptime format of the export's Date column
        """
        self.datetime_format = datetime_format

    def load_archive(self, csv_path: str) -> List[ReviewRecord]:
        """
        Load every record in the export.

        Args:
            csv_path: Path to the CSV export

        Returns:
            All records, oldest first

        Raises:
            FileNotFoundError: If the export does not exist
            ValueError: If a required column is missing or a date cannot be parsed
        """
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
        logger.info(f"Read {len(df)} rows from {csv_path}")
        return self.parse_frame(df)

    def parse_frame(self, df: pd.DataFrame) -> List[ReviewRecord]:
        """Convert an export DataFrame into chronologically sorted records."""
        missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
        if missing:
            raise ValueError(f"Export is missing required columns: {', '.join(missing)}")

        df = df.copy()
        df["_parsed_date"] = self._parse_dates(df[settings.DATE_COLUMN])

        if not df["_parsed_date"].is_monotonic_increasing:
            logger.warning("Export rows are not in date order, sorting by date")
            df = df.sort_values("_parsed_date", kind="mergesort")

        records = [self._to_record(row) for row in df.to_dict(orient="records")]
        logger.info(f"Loaded {len(records)} review records")
        return records

    def select_window(
        self,
        archive: Sequence[ReviewRecord],
        start: datetime,
        end: datetime
    ) -> List[ReviewRecord]:
        """
        Select records dated within [start, end), preserving order.

        Raises:
            ValueError: If start is not before end
        """
        if start >= end:
            raise ValueError(f"Period start {start} must be before end {end}")

        window = [record for record in archive if start <= record.date < end]
        logger.info(f"Selected {len(window)} of {len(archive)} records from {start} to {end}")
        return window

    def _parse_dates(self, dates: pd.Series) -> pd.Series:
        parsed = []
        for index, value in dates.items():
            try:
                parsed.append(datetime.strptime(value.strip(), self.datetime_format))
            except ValueError as e:
                raise ValueError(
                    f"Unparseable {settings.DATE_COLUMN} {value!r} in row {index}: {e}"
                ) from e
        return pd.Series(parsed, index=dates.index, dtype=object)

    def _to_record(self, row: dict) -> ReviewRecord:
        return ReviewRecord(
            developer_id=row[settings.DEVELOPER_COLUMN],
            date=row["_parsed_date"],
            week_label=row[settings.WEEK_COLUMN],
            category_trends={category: row[category.column] for category in Category},
            surprise_text=row[settings.SURPRISES_COLUMN]
        )
