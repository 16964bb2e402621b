from datetime import date, datetime, timedelta

import pytest

from conftest import make_entry
from shiftclock.models.payroll import PaySummary
from shiftclock.services.payroll_service import (
    calculate_pay_summary, calculate_week_breakdown, calculate_month_breakdown,
    calculate_year_breakdown, add_summaries, filter_entries_by_range, week_start,
    first_week_of_month,
)

# Monday 2026-02-02 .. Sunday 2026-02-08
MONDAY = date(2026, 2, 2)


def day_shift(entry_id, day, start_hour, hours):
    start = datetime(day.year, day.month, day.day, start_hour, 0)
    return make_entry(entry_id, start, start + timedelta(hours=hours))


class TestCalculatePaySummary:
    def test_empty_input_is_all_zero(self, config):
        summary = calculate_pay_summary([], config)
        assert summary.model_dump() == PaySummary().model_dump()
        assert summary.estimated_pay == 0

    def test_open_entries_are_ignored(self, config):
        summary = calculate_pay_summary([make_entry("a", datetime(2026, 2, 2, 8, 0))], config)
        assert summary.total_hours == 0
        assert summary.estimated_pay == 0

    def test_nine_hour_day(self, config):
        summary = calculate_pay_summary([day_shift("a", MONDAY, 8, 9)], config)
        assert summary.base_hours == pytest.approx(8)
        assert summary.ot_hours == pytest.approx(1)
        assert summary.penalty_ot_hours == pytest.approx(0)
        assert summary.total_hours == pytest.approx(9)

    def test_eleven_hour_day(self, config):
        summary = calculate_pay_summary([day_shift("a", MONDAY, 6, 11)], config)
        assert summary.base_hours == pytest.approx(8)
        assert summary.ot_hours == pytest.approx(2)
        assert summary.penalty_ot_hours == pytest.approx(1)

    def test_shifts_on_the_same_day_are_combined(self, config):
        entries = [day_shift("a", MONDAY, 6, 5), day_shift("b", MONDAY, 12, 5)]
        summary = calculate_pay_summary(entries, config)
        assert summary.base_hours == pytest.approx(8)
        assert summary.ot_hours == pytest.approx(2)

    def test_overnight_shift_belongs_to_clock_in_day(self, config):
        # 10h starting Monday 16:00; splitting by calendar day would avoid overtime
        entries = [day_shift("a", MONDAY, 16, 10)]
        summary = calculate_pay_summary(entries, config)
        assert summary.base_hours == pytest.approx(8)
        assert summary.ot_hours == pytest.approx(2)

    def test_weekly_overtime_spillover(self, config):
        entries = [day_shift(f"d{i}", MONDAY + timedelta(days=i), 8, 7) for i in range(6)]
        summary = calculate_pay_summary(entries, config)
        assert summary.base_hours == pytest.approx(40)
        assert summary.ot_hours == pytest.approx(2)
        assert summary.penalty_ot_hours == pytest.approx(0)
        assert summary.total_hours == pytest.approx(42)

    def test_weekly_penalty_spillover_runs_after_overtime(self, config):
        entries = [day_shift(f"d{i}", MONDAY + timedelta(days=i), 6, 9) for i in range(7)]
        summary = calculate_pay_summary(entries, config)
        # Daily: 56 base + 7 OT; weekly: 16 base -> OT; 7 OT -> penalty
        assert summary.base_hours == pytest.approx(40)
        assert summary.ot_hours == pytest.approx(16)
        assert summary.penalty_ot_hours == pytest.approx(7)
        assert summary.total_hours == pytest.approx(63)

    def test_pay_amounts(self, config):
        summary = calculate_pay_summary([day_shift("a", MONDAY, 6, 11)], config)
        assert summary.base_pay == pytest.approx(8 * 20.0)
        assert summary.ot_pay == pytest.approx(2 * 20.0 * 1.5)
        assert summary.penalty_ot_pay == pytest.approx(1 * 20.0 * 2.0)
        # 06:00-17:00 is outside the night window
        assert summary.night_diff_pay == 0
        assert summary.estimated_pay == pytest.approx(160 + 60 + 40)

    def test_night_differential_is_a_flat_rate(self, config):
        summary = calculate_pay_summary([day_shift("a", MONDAY, 18, 4)], config)
        assert summary.night_diff_hours == pytest.approx(4)
        assert summary.night_diff_pay == pytest.approx(4 * 1.08)
        assert summary.estimated_pay == pytest.approx(4 * 20.0 + 4 * 1.08)

    def test_sunday_premium(self, config):
        sunday = MONDAY + timedelta(days=6)
        summary = calculate_pay_summary([day_shift("a", sunday, 10, 4)], config)
        assert summary.sunday_hours == pytest.approx(4)
        assert summary.sunday_premium_pay == pytest.approx(4 * 20.0 * 0.25)
        assert summary.estimated_pay == pytest.approx(80 + 20)

    def test_input_order_does_not_matter(self, config):
        entries = [day_shift(f"d{i}", MONDAY + timedelta(days=i), 20, 9) for i in range(5)]
        forward = calculate_pay_summary(entries, config)
        backward = calculate_pay_summary(list(reversed(entries)), config)
        assert forward.model_dump() == pytest.approx(backward.model_dump())


class TestRanges:
    def test_week_start(self):
        assert week_start(date(2026, 2, 8)) == MONDAY
        assert week_start(MONDAY) == MONDAY
        assert week_start(date(2026, 2, 4)) == MONDAY

    def test_first_week_of_month(self):
        assert first_week_of_month(2026, 2) == date(2026, 2, 2)
        assert first_week_of_month(2026, 3) == date(2026, 3, 2)
        assert first_week_of_month(2026, 6) == date(2026, 6, 1)

    def test_filter_entries_by_range(self):
        entries = [
            day_shift("a", MONDAY, 8, 1),
            day_shift("b", MONDAY + timedelta(days=1), 0, 1),
        ]
        start = datetime(2026, 2, 2, 0, 0).astimezone()
        end = datetime(2026, 2, 3, 0, 0).astimezone()
        assert [e.id for e in filter_entries_by_range(entries, start, end)] == ["a", "b"]
        assert [e.id for e in filter_entries_by_range(entries, start, end, exclusive_end=True)] == ["a"]

    def test_add_summaries(self):
        total = add_summaries([PaySummary(total_hours=2, estimated_pay=10), PaySummary(total_hours=3)])
        assert total.total_hours == 5
        assert total.estimated_pay == 10
        assert add_summaries([]).model_dump() == PaySummary().model_dump()


class TestBreakdowns:
    def test_week_breakdown_rows(self, config):
        entries = [day_shift(f"d{i}", MONDAY + timedelta(days=i), 8, 7) for i in range(6)]
        week = calculate_week_breakdown(entries, date(2026, 2, 5), config)

        assert week.week_start == MONDAY
        assert week.week_end == date(2026, 2, 8)
        assert [d.weekday for d in week.days][0] == "Monday"
        assert len(week.days) == 7
        # Day rows see one day each, so only the total has weekly spillover
        assert all(d.summary.ot_hours == 0 for d in week.days)
        assert week.days[6].summary.total_hours == 0
        assert week.total.base_hours == pytest.approx(40)
        assert week.total.ot_hours == pytest.approx(2)

    def test_week_breakdown_ignores_other_weeks(self, config):
        entries = [
            day_shift("prev", MONDAY - timedelta(days=1), 8, 8),
            day_shift("this", MONDAY, 8, 8),
            day_shift("next", MONDAY + timedelta(days=7), 8, 8),
        ]
        week = calculate_week_breakdown(entries, MONDAY, config)
        assert week.total.total_hours == pytest.approx(8)

    def test_month_breakdown_uses_weeks_starting_in_month(self, config):
        entries = [
            day_shift("jan", date(2026, 1, 31), 8, 8),      # Saturday, week of Jan 26
            day_shift("feb1", date(2026, 2, 3), 8, 9),
            day_shift("feb2", date(2026, 2, 24), 8, 8),
            day_shift("mar", date(2026, 3, 1), 8, 8),       # Sunday, still week of Feb 23
        ]
        month = calculate_month_breakdown(entries, 2026, 2, config)

        assert month.month_name == "February"
        assert [w.week_start for w in month.weeks] == [
            date(2026, 2, 2), date(2026, 2, 9), date(2026, 2, 16), date(2026, 2, 23),
        ]
        assert month.total.total_hours == pytest.approx(9 + 8 + 8)
        assert month.total.ot_hours == pytest.approx(1)
        assert month.total.sunday_hours == pytest.approx(8)
        assert month.total.estimated_pay == pytest.approx(sum(w.summary.estimated_pay for w in month.weeks))

    def test_year_breakdown(self, config):
        entries = [
            day_shift("a", date(2026, 2, 3), 8, 8),
            day_shift("b", date(2026, 6, 2), 8, 8),
            day_shift("c", date(2027, 1, 5), 8, 8),
        ]
        year = calculate_year_breakdown(entries, 2026, config)

        assert len(year.months) == 12
        assert year.months[1].summary.total_hours == pytest.approx(8)
        assert year.months[5].summary.total_hours == pytest.approx(8)
        assert year.total.total_hours == pytest.approx(16)
