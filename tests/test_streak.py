from datetime import date, datetime, timedelta

import pytest

from painpal.services.streak import compute_day_streak

TODAY = date(2026, 10, 19)


def days_ago(*offsets):
    return [TODAY - timedelta(days=n) for n in offsets]


def test_no_logs_means_no_streak():
    assert compute_day_streak([], TODAY) == 0


def test_today_only():
    assert compute_day_streak(days_ago(0), TODAY) == 1


def test_run_ending_today():
    assert compute_day_streak(days_ago(0, 1, 2, 3), TODAY) == 4


def test_run_ending_yesterday_does_not_count():
    assert compute_day_streak(days_ago(1, 2, 3), TODAY) == 0


def test_gap_resets_to_run_ending_today():
    assert compute_day_streak(days_ago(0, 2, 3, 4), TODAY) == 1


def test_same_day_counts_once():
    morning = datetime(2026, 10, 19, 7, 30)
    evening = datetime(2026, 10, 19, 22, 15)
    assert compute_day_streak([morning, evening, morning], TODAY) == 1


def test_calendar_day_not_rolling_24_hours():
    # 23:59 yesterday and 00:01 today are two minutes apart but two days
    late = datetime(2026, 10, 18, 23, 59)
    early = datetime(2026, 10, 19, 0, 1)
    assert compute_day_streak([late, early], TODAY) == 2


def test_crosses_month_and_leap_day():
    days = [date(2024, 3, 1), date(2024, 2, 29), date(2024, 2, 28)]
    assert compute_day_streak(days, date(2024, 3, 1)) == 3


def test_future_dates_are_ignored():
    assert compute_day_streak(days_ago(-1, 0), TODAY) == 1


@pytest.mark.parametrize(
    "offsets, expected",
    [
        ((0,), 1),
        ((0, 1), 2),
        ((1,), 0),
        ((0, 1, 3, 4, 5), 2),
        ((2, 1), 0),
        (tuple(range(30)), 30),
    ],
)
def test_streak_is_run_length_ending_today(offsets, expected):
    assert compute_day_streak(days_ago(*offsets), TODAY) == expected
