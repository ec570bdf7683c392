from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from visit_insights.core.errors import InvalidArgument
from visit_insights.services.periods import (
    add_periods,
    parse_last_n,
    period_bounds,
    previous_period,
    relative_date_range,
    resolve_end_date,
)
from visit_insights.services.sites import Site

UTC_SITE = Site(id=1, name="Example", timezone="UTC")
LA_SITE = Site(id=3, name="West coast", timezone="America/Los_Angeles")


def test_last30_days_ends_on_given_date():
    assert relative_date_range("day", "last30", "2015-07-26", UTC_SITE) == "2015-06-27,2015-07-26"


def test_previous_range_ends_one_period_earlier():
    assert relative_date_range("day", "previous7", "2015-07-26", UTC_SITE) == "2015-07-19,2015-07-25"


def test_week_range_snaps_to_monday_and_sunday():
    # 2015-07-22 is a Wednesday.
    assert relative_date_range("week", "last2", "2015-07-22", UTC_SITE) == "2015-07-13,2015-07-26"


def test_month_and_year_ranges_snap_to_boundaries():
    assert relative_date_range("month", "last3", "2015-07-26", UTC_SITE) == "2015-05-01,2015-07-31"
    assert relative_date_range("year", "last2", "2015-07-26", UTC_SITE) == "2014-01-01,2015-12-31"


def test_end_date_may_be_a_range_expression():
    assert relative_date_range("day", "last3", "2015-07-01,2015-07-26", UTC_SITE) == "2015-07-24,2015-07-26"


def test_last_n_is_capped_per_period():
    start, end = relative_date_range("year", "last50", "2015-07-26", UTC_SITE).split(",")
    assert start == "2006-01-01"
    assert end == "2015-12-31"


def test_last0_behaves_like_last1():
    assert relative_date_range("day", "last0", "2015-07-26", UTC_SITE) == "2015-07-26,2015-07-26"


def test_keywords_resolve_in_site_timezone():
    now = datetime(2015, 7, 27, 1, 30, tzinfo=ZoneInfo("UTC"))

    assert resolve_end_date("today", "UTC", now=now) == date(2015, 7, 27)
    assert resolve_end_date("today", LA_SITE.timezone, now=now) == date(2015, 7, 26)
    assert resolve_end_date("yesterday", LA_SITE.timezone, now=now) == date(2015, 7, 25)
    assert relative_date_range("day", "last2", "yesterday", LA_SITE, now=now) == "2015-07-24,2015-07-25"


@pytest.mark.parametrize("bad_date", ["tomorrow-ish", "2015-13-01", ""])
def test_invalid_end_date(bad_date):
    with pytest.raises(InvalidArgument):
        resolve_end_date(bad_date)


def test_invalid_period_and_range():
    with pytest.raises(InvalidArgument):
        relative_date_range("decade", "last3", "2015-07-26", UTC_SITE)
    with pytest.raises(InvalidArgument):
        relative_date_range("day", "next3", "2015-07-26", UTC_SITE)


def test_parse_last_n():
    assert parse_last_n("last30") == ("last", 30)
    assert parse_last_n("previous") == ("previous", 1)


def test_add_periods_clamps_short_months():
    assert add_periods(date(2015, 3, 31), -1, "month") == date(2015, 2, 28)
    assert add_periods(date(2016, 2, 29), 1, "year") == date(2017, 2, 28)
    assert add_periods(date(2015, 12, 15), 1, "month") == date(2016, 1, 15)


def test_period_bounds_and_previous_period():
    assert period_bounds("week", date(2015, 7, 26)) == (date(2015, 7, 20), date(2015, 7, 26))
    assert period_bounds("month", date(2016, 2, 10)) == (date(2016, 2, 1), date(2016, 2, 29))
    assert previous_period("day", date(2015, 7, 1)) == (date(2015, 6, 30), date(2015, 6, 30))
    assert previous_period("month", date(2015, 3, 31)) == (date(2015, 2, 1), date(2015, 2, 28))
