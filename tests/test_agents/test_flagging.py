"""
Unit tests for the Flag Evaluator.
"""

from unittest.mock import Mock

import pytest

from src.agents.flagging import FlagEvaluator
from src.models.review import Category

IMPROVED = "Notable improvement between sessions"


@pytest.fixture
def evaluator():
    """Create a flag evaluator with default settings."""
    return FlagEvaluator()


def _scoring(make_record, score, developer_id="D1", day=0, general=""):
    """Record with `score` distinct negative trends spread over TDD."""
    tdd = ",".join(f"Trend {i}" for i in range(score))
    return make_record(developer_id=developer_id, day=day, general=general, tdd=tdd)


def test_score_removes_excluded_labels(evaluator, make_record):
    """Test that excluded labels are removed before scoring."""
    record = make_record(
        general="No-show,Late",
        tdd="Slow,Unprepared",
        requirements="Vague",
        debugging="Stuck"
    )

    assert evaluator.negative_trends(record, Category.GENERAL) == 1
    assert evaluator.negative_trends(record, Category.TDD) == 2
    assert evaluator.negative_trend_score(record) == 5


def test_score_counts_distinct_labels_per_category(evaluator, make_record):
    """Test that repeated labels count once per category."""
    record = make_record(tdd="Slow,Slow,Slow", debugging="Slow")

    assert evaluator.negative_trend_score(record) == 2


def test_score_ignores_every_excluded_label(evaluator, make_record):
    """Test that a record of only excluded labels scores zero."""
    record = make_record(general="No-show,No UUID provided,UUID error," + IMPROVED)

    assert evaluator.negative_trend_score(record) == 0


@pytest.mark.parametrize("score, expected", [(3, False), (4, True), (5, True)])
def test_raw_candidate_threshold(evaluator, make_record, score, expected):
    """Test the raw candidate boundary at scores 3, 4 and 5."""
    assert evaluator.is_raw_candidate(_scoring(make_record, score)) is expected


def test_flags_developer_with_history(evaluator, make_record):
    """Test that a candidate with more than one session is flagged."""
    window = [
        _scoring(make_record, 1, day=0),
        _scoring(make_record, 4, day=1),
    ]

    assert evaluator.evaluate(window, window) == ["D1"]


def test_single_archive_record_is_never_flagged(evaluator, make_record):
    """Test that a developer with one archive record is never flagged."""
    record = _scoring(make_record, 6)

    assert evaluator.evaluate([record], [record]) == []


def test_history_is_counted_over_the_archive(evaluator, make_record):
    """Test that sessions outside the window count as history."""
    earlier = _scoring(make_record, 0, day=0)
    in_window = _scoring(make_record, 4, day=10)

    assert evaluator.evaluate([in_window], [earlier, in_window]) == ["D1"]


def test_last_window_record_with_improvement_excludes(evaluator, make_record):
    """Test that an improved last session excludes an earlier candidate."""
    window = [
        make_record(
            developer_id="D1",
            day=0,
            general="No-show,Late",
            tdd="Slow,Unprepared",
            requirements="Vague",
            debugging="Stuck"
        ),
        make_record(developer_id="D1", day=1, general=IMPROVED),
    ]

    assert evaluator.is_raw_candidate(window[0])
    assert evaluator.evaluate(window, window) == []


def test_improvement_on_earlier_record_does_not_exclude(evaluator, make_record):
    """Test that only the last window record is checked for improvement."""
    window = [
        make_record(developer_id="D1", day=0, general=IMPROVED),
        _scoring(make_record, 4, day=1),
    ]

    assert evaluator.evaluate(window, window) == ["D1"]


def test_improvement_on_candidate_row_itself_excludes(evaluator, make_record):
    """Test that a candidate row which is also the improved last row is excluded."""
    window = [
        _scoring(make_record, 1, day=0),
        _scoring(make_record, 4, day=1, general=IMPROVED),
    ]

    assert evaluator.evaluate(window, window) == []


def test_flags_are_deduplicated_in_first_occurrence_order(evaluator, make_record):
    """Test that flags keep first-occurrence order without duplicates."""
    window = [
        _scoring(make_record, 4, developer_id="D2", day=0),
        _scoring(make_record, 4, developer_id="D1", day=1),
        _scoring(make_record, 5, developer_id="D2", day=2),
        _scoring(make_record, 0, developer_id="D3", day=3),
        _scoring(make_record, 4, developer_id="D3", day=4),
        _scoring(make_record, 1, developer_id="D1", day=5),
    ]

    assert evaluator.evaluate(window, window) == ["D2", "D1", "D3"]


def test_empty_window(evaluator):
    """Test that an empty window produces no flags."""
    assert evaluator.evaluate([], []) == []


def test_unsorted_window_fails_fast(evaluator, make_record):
    """Test that an out-of-order window raises ValueError."""
    window = [
        _scoring(make_record, 4, day=5),
        _scoring(make_record, 4, day=1),
    ]

    with pytest.raises(ValueError, match="sorted by date"):
        evaluator.evaluate(window, sorted(window, key=lambda r: r.date))


def test_custom_threshold_and_exclusions(make_record):
    """Test a custom threshold and exclusion list."""
    evaluator = FlagEvaluator(threshold=2, excluded_labels=["Late"])
    window = [
        make_record(day=0),
        make_record(day=1, general="Late,No-show", tdd="Slow"),
    ]

    # No-show counts as negative once it is not in the exclusion list
    assert evaluator.negative_trend_score(window[1]) == 2
    assert evaluator.evaluate(window, window) == ["D1"]


def test_confirmation_receives_full_candidate_list(evaluator, make_record):
    """Test that confirmation gets every candidate once and filters them."""
    window = [
        _scoring(make_record, 4, developer_id="D1", day=0),
        _scoring(make_record, 4, developer_id="D2", day=1),
        _scoring(make_record, 4, developer_id="D1", day=2),
        _scoring(make_record, 4, developer_id="D2", day=3),
    ]
    confirm = Mock(side_effect=lambda names: [n for n in names if n != "D1"])

    assert evaluator.flag(window, window, confirm) == ["D2"]
    confirm.assert_called_once_with(["D1", "D2"])


def test_confirmation_called_once_even_without_candidates(evaluator, make_record):
    """Test that confirmation runs once even with no candidates."""
    window = [_scoring(make_record, 0)]
    confirm = Mock(return_value=[])

    assert evaluator.flag(window, window, confirm) == []
    confirm.assert_called_once_with([])


@pytest.mark.parametrize("returned", [["D2", "D1"], ["D1", "D3"], ["D1", "D1"]])
def test_confirmation_must_return_subsequence(evaluator, make_record, returned):
    """Test that reordered, added or repeated confirmations raise ValueError."""
    window = [
        _scoring(make_record, 4, developer_id="D1", day=0),
        _scoring(make_record, 4, developer_id="D2", day=1),
        _scoring(make_record, 4, developer_id="D1", day=2),
        _scoring(make_record, 4, developer_id="D2", day=3),
    ]

    with pytest.raises(ValueError, match="subsequence"):
        evaluator.flag(window, window, lambda names: returned)
