"""
Entry checks. Each check is independent and returns a bool so a caller can
report a specific message per failure; none of them raise.
"""
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from pydantic import ValidationError

from shiftclock.models.entries import TimeEntry

# Messages shown when an edit or insert is refused
INVALID_ENTRY_MESSAGE = (
    "Invalid entry: clock-in must be a valid time, and clock-out (if set) must be after clock-in."
)
OVERLAP_MESSAGE = "Invalid entry: this entry's time range overlaps with an existing entry."
OPEN_NOT_LAST_MESSAGE = (
    "Invalid entry: an in-progress entry (no clock-out) must be the most recent entry. "
    "Remove or update newer entries first."
)

def parse_entry(record: Any) -> Optional[TimeEntry]:
    """Build a TimeEntry from a raw record, or None if it is structurally invalid"""
    if isinstance(record, TimeEntry):
        record = record.model_dump(by_alias=True)
    if not isinstance(record, Mapping):
        return None
    try:
        return TimeEntry.model_validate(record)
    except (ValidationError, OverflowError):
        return None

def is_structurally_valid(entry: Any) -> bool:
    """Non-empty id, parseable clock-in, clock-out (if set) after clock-in, text notes"""
    return parse_entry(entry) is not None

def has_no_overlap(entry: TimeEntry, all_entries: Iterable[TimeEntry]) -> bool:
    """True when ``entry`` shares no time with any other entry.

    An open entry extends forever. Intervals that only touch at a boundary
    are adjacent, not overlapping.
    """
    entry_start = entry.clock_in
    entry_end = entry.clock_out

    for other in all_entries:
        if other.id == entry.id:
            continue
        entry_starts_before_other_ends = other.clock_out is None or entry_start < other.clock_out
        other_starts_before_entry_ends = entry_end is None or other.clock_in < entry_end
        if entry_starts_before_other_ends and other_starts_before_entry_ends:
            return False

    return True

def is_single_open_consistent(entry: TimeEntry, all_entries: Iterable[TimeEntry]) -> bool:
    """An open entry must have the latest clock-in of the collection"""
    if entry.clock_out is not None:
        return True

    entry_start: datetime = entry.clock_in
    return not any(
        other.clock_in > entry_start
        for other in all_entries
        if other.id != entry.id
    )
