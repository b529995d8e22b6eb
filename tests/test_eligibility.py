from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from reminders.eligibility import eligible_from, is_eligible


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


def test_donor_who_never_donated_is_eligible_now():
    now = utc(2024, 6, 1, 12)
    assert is_eligible(None, now)
    assert eligible_from(None, now) == now


def test_month_end_donation_rolls_to_shorter_month_end():
    last = utc(2024, 1, 31)
    assert eligible_from(last) == utc(2024, 4, 30)
    assert not is_eligible(last, utc(2024, 4, 29))
    assert is_eligible(last, utc(2024, 4, 30))


def test_three_calendar_months_not_ninety_days():
    last = utc(2024, 3, 15, 10, 0)
    # 90 days later is 13 June, still before 15 June
    assert not is_eligible(last, last + timedelta(days=90))
    assert eligible_from(last) == utc(2024, 6, 15, 10, 0)
    assert is_eligible(last, utc(2024, 6, 15, 10, 0))


def test_boundary_is_inclusive():
    last = utc(2024, 5, 10, 8, 0)
    boundary = utc(2024, 8, 10, 8, 0)
    assert not is_eligible(last, boundary - timedelta(seconds=1))
    assert is_eligible(last, boundary)


def test_leap_year_february():
    assert eligible_from(utc(2023, 11, 30)) == utc(2024, 2, 29)
    assert eligible_from(utc(2022, 11, 30)) == utc(2023, 2, 28)


@pytest.mark.parametrize('months, expected', [(1, utc(2024, 2, 29)), (6, utc(2024, 7, 31))])
def test_eligibility_window_is_configurable(settings, months, expected):
    settings.RAKTSETU_ELIGIBILITY_MONTHS = months
    assert eligible_from(utc(2024, 1, 31)) == expected
