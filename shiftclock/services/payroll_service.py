from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List
import calendar

from shiftclock.models.entries import TimeEntry
from shiftclock.models.payroll import (
    PayRateConfig, PaySummary, DayBreakdown, WeekBreakdown, WeekRow,
    MonthBreakdown, MonthRow, YearBreakdown,
)
from shiftclock.services.hours_service import (
    shift_hours, night_diff_hours, sunday_hours, local_wall_time,
)

def calculate_pay_summary(entries: Iterable[TimeEntry], config: PayRateConfig) -> PaySummary:
    """Tiered pay breakdown for a set of entries.

    The caller picks the accounting period (normally one week): the weekly
    thresholds apply to whatever entries are passed in. Open entries are
    left out entirely.

    Daily tiers are applied per local calendar day of clock-in, then hours
    over the weekly thresholds spill from base into overtime and from
    overtime into penalty overtime, in that order.
    """
    days: Dict[date, List[TimeEntry]] = defaultdict(list)
    for entry in entries:
        if entry.clock_out is None:
            continue
        days[entry.clock_in.date()].append(entry)

    base_hours = 0.0
    ot_hours = 0.0
    penalty_ot_hours = 0.0
    night_hours = 0.0
    sunday_total = 0.0

    for day_entries in days.values():
        day_total = sum(shift_hours(e) for e in day_entries)
        base_hours += min(day_total, config.daily_overtime_threshold_hours)
        ot_hours += max(
            0.0,
            min(day_total, config.daily_penalty_ot_threshold_hours) - config.daily_overtime_threshold_hours,
        )
        penalty_ot_hours += max(0.0, day_total - config.daily_penalty_ot_threshold_hours)

        for e in day_entries:
            night_hours += night_diff_hours(e, config)
            sunday_total += sunday_hours(e)

    # Weekly OT: excess base hours become overtime
    if base_hours > config.weekly_overtime_threshold_hours:
        spillover = base_hours - config.weekly_overtime_threshold_hours
        base_hours = config.weekly_overtime_threshold_hours
        ot_hours += spillover

    # Weekly penalty OT: excess overtime becomes penalty overtime
    if base_hours + ot_hours > config.weekly_penalty_ot_threshold_hours:
        spillover = (base_hours + ot_hours) - config.weekly_penalty_ot_threshold_hours
        ot_hours -= spillover
        penalty_ot_hours += spillover

    rate = config.base_hourly_rate
    base_pay = base_hours * rate
    ot_pay = ot_hours * rate * config.overtime_multiplier
    penalty_ot_pay = penalty_ot_hours * rate * config.penalty_overtime_multiplier
    night_diff_pay = night_hours * config.night_differential_rate
    sunday_premium_pay = sunday_total * rate * (config.sunday_premium_percent / 100)

    return PaySummary(
        total_hours=base_hours + ot_hours + penalty_ot_hours,
        base_hours=base_hours,
        ot_hours=ot_hours,
        penalty_ot_hours=penalty_ot_hours,
        night_diff_hours=night_hours,
        sunday_hours=sunday_total,
        base_pay=base_pay,
        ot_pay=ot_pay,
        penalty_ot_pay=penalty_ot_pay,
        night_diff_pay=night_diff_pay,
        sunday_premium_pay=sunday_premium_pay,
        estimated_pay=base_pay + ot_pay + penalty_ot_pay + night_diff_pay + sunday_premium_pay,
    )

def add_summaries(summaries: Iterable[PaySummary]) -> PaySummary:
    """Field-wise sum, used for month and year totals built from weekly summaries"""
    summaries = list(summaries)
    return PaySummary(**{
        name: sum(getattr(s, name) for s in summaries)
        for name in PaySummary.model_fields
    })

def filter_entries_by_range(
    entries: Iterable[TimeEntry],
    start: datetime,
    end: datetime,
    exclusive_end: bool = False,
) -> List[TimeEntry]:
    """Entries whose clock-in falls within [start, end], or [start, end) when exclusive_end"""
    if exclusive_end:
        return [e for e in entries if start <= e.clock_in < end]
    return [e for e in entries if start <= e.clock_in <= end]

def week_start(day: date) -> date:
    """Monday of the week containing ``day``"""
    return day - timedelta(days=day.weekday())

def first_week_of_month(year: int, month: int) -> date:
    """First Monday on or after the 1st; a week belongs to the month of its Monday"""
    month_start = date(year, month, 1)
    monday = week_start(month_start)
    if monday < month_start:
        monday += timedelta(days=7)
    return monday

def _entries_between(entries: List[TimeEntry], first_day: date, end_day: date) -> List[TimeEntry]:
    return filter_entries_by_range(entries, local_wall_time(first_day), local_wall_time(end_day), exclusive_end=True)

def calculate_week_breakdown(entries: Iterable[TimeEntry], week_of: date, config: PayRateConfig) -> WeekBreakdown:
    """One summary per day of the week containing ``week_of`` plus the week total.

    Day rows only see that day's entries, so weekly spillover shows up in the
    total alone.
    """
    entries = list(entries)
    monday = week_start(week_of)

    days = []
    for offset in range(7):
        day = monday + timedelta(days=offset)
        days.append(DayBreakdown(
            day=day,
            weekday=calendar.day_name[day.weekday()],
            summary=calculate_pay_summary(_entries_between(entries, day, day + timedelta(days=1)), config),
        ))

    week_entries = _entries_between(entries, monday, monday + timedelta(days=7))
    return WeekBreakdown(
        week_start=monday,
        week_end=monday + timedelta(days=6),
        days=days,
        total=calculate_pay_summary(week_entries, config),
    )

def _weekly_rows(entries: List[TimeEntry], year: int, month: int, config: PayRateConfig) -> List[WeekRow]:
    next_month = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    rows = []
    monday = first_week_of_month(year, month)
    while monday < next_month:
        week_end = monday + timedelta(days=7)
        rows.append(WeekRow(
            week_start=monday,
            week_end=monday + timedelta(days=6),
            summary=calculate_pay_summary(_entries_between(entries, monday, week_end), config),
        ))
        monday = week_end
    return rows

def calculate_month_breakdown(
    entries: Iterable[TimeEntry], year: int, month: int, config: PayRateConfig
) -> MonthBreakdown:
    """Weekly summaries for the weeks whose Monday falls in the month, plus their sum"""
    weeks = _weekly_rows(list(entries), year, month, config)
    return MonthBreakdown(
        year=year,
        month=month,
        month_name=calendar.month_name[month],
        weeks=weeks,
        total=add_summaries(w.summary for w in weeks),
    )

def calculate_year_breakdown(entries: Iterable[TimeEntry], year: int, config: PayRateConfig) -> YearBreakdown:
    """Month totals (each the sum of its weekly summaries) and the year total"""
    entries = list(entries)
    months = []
    for month in range(1, 13):
        weeks = _weekly_rows(entries, year, month, config)
        months.append(MonthRow(
            month=month,
            month_name=calendar.month_name[month],
            summary=add_summaries(w.summary for w in weeks),
        ))

    return YearBreakdown(year=year, months=months, total=add_summaries(m.summary for m in months))
