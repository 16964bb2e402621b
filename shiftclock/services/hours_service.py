"""
Per-entry hour calculations: shift length, night differential and Sunday hours.

All day boundaries are local calendar days. Boundaries are built from local
wall-clock time, so a DST transition day is 23 or 25 hours long.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Tuple

from shiftclock.models.entries import TimeEntry
from shiftclock.models.payroll import PayRateConfig

SECONDS_PER_HOUR = 3600
SUNDAY = 6  # date.weekday()

def parse_hhmm(value: str) -> int:
    """Convert 'HH:MM' into minutes past midnight"""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)

def local_wall_time(day: date, minutes: int = 0) -> datetime:
    """Aware local datetime for ``minutes`` past local midnight of ``day``.

    Minutes may run past 24:00, rolling into the following day.
    """
    naive = datetime.combine(day, time()) + timedelta(minutes=minutes)
    return naive.astimezone()

def local_days(start: datetime, end: datetime) -> Iterator[date]:
    """Every local calendar day from the day of ``start`` whose midnight is not after ``end``"""
    day = start.astimezone().date()
    while local_wall_time(day) <= end:
        yield day
        day += timedelta(days=1)

def overlap(start: datetime, end: datetime, seg_start: datetime, seg_end: datetime) -> timedelta:
    """Length of the intersection of [start, end) and [seg_start, seg_end), never negative"""
    return max(timedelta(0), min(end, seg_end) - max(start, seg_start))

def _closed_interval(entry: TimeEntry) -> Optional[Tuple[datetime, datetime]]:
    if entry.clock_out is None:
        return None
    return entry.clock_in, entry.clock_out

def shift_hours(entry: TimeEntry) -> float:
    """Duration of a completed shift in decimal hours, 0 if open"""
    interval = _closed_interval(entry)
    if interval is None:
        return 0.0
    start, end = interval
    return (end - start).total_seconds() / SECONDS_PER_HOUR

def night_diff_hours(entry: TimeEntry, config: PayRateConfig) -> float:
    """Hours of a shift that fall inside the nightly differential window.

    When the window wraps midnight (e.g. 18:00-06:00) each local day
    contributes an evening segment [start, next midnight) and a morning
    segment [midnight, end). Otherwise each day has the single segment
    [start, end).
    """
    interval = _closed_interval(entry)
    if interval is None:
        return 0.0
    shift_start, shift_end = interval

    night_start = parse_hhmm(config.night_diff_start_time)
    night_end = parse_hhmm(config.night_diff_end_time)
    wraps = night_start > night_end

    total = timedelta(0)
    for day in local_days(shift_start, shift_end):
        if wraps:
            segments = [
                (local_wall_time(day, night_start), local_wall_time(day + timedelta(days=1))),
                (local_wall_time(day), local_wall_time(day, night_end)),
            ]
        else:
            segments = [(local_wall_time(day, night_start), local_wall_time(day, night_end))]

        for seg_start, seg_end in segments:
            total += overlap(shift_start, shift_end, seg_start, seg_end)

    return total.total_seconds() / SECONDS_PER_HOUR

def sunday_hours(entry: TimeEntry) -> float:
    """Hours of a shift that fall on a local Sunday"""
    interval = _closed_interval(entry)
    if interval is None:
        return 0.0
    shift_start, shift_end = interval

    total = timedelta(0)
    for day in local_days(shift_start, shift_end):
        if day.weekday() != SUNDAY:
            continue
        total += overlap(shift_start, shift_end, local_wall_time(day), local_wall_time(day + timedelta(days=1)))

    return total.total_seconds() / SECONDS_PER_HOUR

def format_duration(clock_in: datetime, clock_out: Optional[datetime]) -> Optional[str]:
    """Format elapsed time as HH:MM:SS (whole seconds), None for an open shift"""
    if clock_out is None:
        return None
    total_seconds = int((clock_out - clock_in).total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
