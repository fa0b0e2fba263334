"""Shared fixtures for trend report tests."""

from datetime import datetime, timedelta

import pytest

from src.models.review import Category, ReviewRecord


@pytest.fixture
def make_record():
    """Factory for ReviewRecord with empty fields by default."""
    def _make(
        developer_id="D1",
        date=None,
        general="",
        tdd="",
        requirements="",
        debugging="",
        week="Week 1",
        surprise="",
        day=0
    ):
        return ReviewRecord(
            developer_id=developer_id,
            date=date or datetime(2021, 2, 1, 9, 0) + timedelta(days=day),
            week_label=week,
            category_trends={
                Category.GENERAL: general,
                Category.TDD: tdd,
                Category.REQUIREMENTS_GATHERING: requirements,
                Category.DEBUGGING: debugging,
            },
            surprise_text=surprise
        )
    return _make
