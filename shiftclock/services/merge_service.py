from typing import Dict, Iterable, List

from shiftclock.models.entries import TimeEntry

def merge_entries(base: Iterable[TimeEntry], incoming: Iterable[TimeEntry]) -> List[TimeEntry]:
    """Deduplicate by id, incoming records replacing base ones; sorted by clock-in.

    This is last-writer-wins: concurrent edits to the same entry from two
    devices are not detected, the incoming copy simply replaces the other.
    No validation is done here.
    """
    merged: Dict[str, TimeEntry] = {}
    for entry in base:
        merged[entry.id] = entry
    for entry in incoming:
        merged[entry.id] = entry

    return sorted(merged.values(), key=lambda e: e.clock_in)
