import logging
import uuid
from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple

from shiftclock.core.database import get_db
from shiftclock.core.exceptions import EntryNotFoundError, EntryValidationError
from shiftclock.models.entries import TimeEntry, ImportResult
from shiftclock.services.merge_service import merge_entries
from shiftclock.services.validation_service import (
    parse_entry, has_no_overlap, is_single_open_consistent,
    INVALID_ENTRY_MESSAGE, OVERLAP_MESSAGE, OPEN_NOT_LAST_MESSAGE,
)

logger = logging.getLogger(__name__)

IMPORT_MODES = ("add", "replace")

def _now(now: Optional[datetime]) -> datetime:
    return (now or datetime.now()).astimezone()

def get_open_entry(entries: Iterable[TimeEntry]) -> Optional[TimeEntry]:
    """The in-progress entry, if any"""
    return next((e for e in entries if e.clock_out is None), None)

def create_entry(now: Optional[datetime] = None) -> TimeEntry:
    """New open entry clocked in at ``now``"""
    return TimeEntry(id=str(uuid.uuid4()), clock_in=_now(now), clock_out=None, notes="")

def clock_out_entry(entry: TimeEntry, now: Optional[datetime] = None) -> TimeEntry:
    """Closed copy of ``entry``; the original is left untouched"""
    return entry.model_copy(update={"clock_out": _now(now)})

def check_entry(record: Any, all_entries: List[TimeEntry]) -> TimeEntry:
    """Run the three entry checks in order, raising on the first failure"""
    entry = parse_entry(record)
    if entry is None:
        raise EntryValidationError("invalid", INVALID_ENTRY_MESSAGE)
    if not has_no_overlap(entry, all_entries):
        raise EntryValidationError("overlap", OVERLAP_MESSAGE)
    if not is_single_open_consistent(entry, all_entries):
        raise EntryValidationError("open_not_last", OPEN_NOT_LAST_MESSAGE)
    return entry

# Entry store

def _row_to_entry(row) -> TimeEntry:
    return TimeEntry(
        id=row['id'],
        clock_in=datetime.fromisoformat(row['clock_in']),
        clock_out=datetime.fromisoformat(row['clock_out']) if row['clock_out'] else None,
        notes=row['notes'] or "",
    )

def _entry_to_row(entry: TimeEntry) -> Tuple[str, str, Optional[str], str]:
    return (
        entry.id,
        entry.clock_in.isoformat(),
        entry.clock_out.isoformat() if entry.clock_out else None,
        entry.notes,
    )

def load_entries() -> List[TimeEntry]:
    """All stored entries, oldest clock-in first"""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, clock_in, clock_out, notes FROM time_entries")
        entries = [_row_to_entry(row) for row in cursor.fetchall()]

    return sorted(entries, key=lambda e: e.clock_in)

def save_entries(entries: Iterable[TimeEntry]) -> None:
    """Replace the stored collection"""
    rows = [_entry_to_row(e) for e in sorted(entries, key=lambda e: e.clock_in)]
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM time_entries")
        cursor.executemany('''
            INSERT INTO time_entries (id, clock_in, clock_out, notes)
            VALUES (?, ?, ?, ?)
        ''', rows)
        conn.commit()

def _insert_or_replace(entry: TimeEntry) -> None:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute('''
            INSERT OR REPLACE INTO time_entries (id, clock_in, clock_out, notes)
            VALUES (?, ?, ?, ?)
        ''', _entry_to_row(entry))
        conn.commit()

def get_entry(entry_id: str) -> TimeEntry:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT id, clock_in, clock_out, notes FROM time_entries WHERE id = ?",
            (entry_id,)
        )
        row = cursor.fetchone()

    if row is None:
        raise EntryNotFoundError(entry_id)
    return _row_to_entry(row)

def toggle_clock(now: Optional[datetime] = None) -> Tuple[str, TimeEntry]:
    """Clock out the open entry, or clock in a new one when none is open"""
    entries = load_entries()
    open_entry = get_open_entry(entries)

    if open_entry:
        clock_type = "OUT"
        entry = check_entry(clock_out_entry(open_entry, now), entries)
    else:
        clock_type = "IN"
        entry = check_entry(create_entry(now), entries)

    _insert_or_replace(entry)
    timestamp = entry.clock_out if clock_type == "OUT" else entry.clock_in
    logger.info(f"Clock {clock_type} recorded for entry {entry.id} at {timestamp}")
    return clock_type, entry

def update_entry(record: Any) -> TimeEntry:
    """Replace an existing entry wholesale after it passes every entry check"""
    entries = load_entries()
    entry_id = record.get('id') if isinstance(record, dict) else getattr(record, 'id', None)
    if not any(e.id == entry_id for e in entries):
        raise EntryNotFoundError(str(entry_id))

    try:
        entry = check_entry(record, entries)
    except EntryValidationError as e:
        logger.warning(f"Rejected edit of entry {entry_id}: {e.reason}")
        raise

    _insert_or_replace(entry)
    logger.info(f"Entry {entry.id} updated")
    return entry

def delete_entry(entry_id: str) -> None:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM time_entries WHERE id = ?", (entry_id,))
        deleted = cursor.rowcount
        conn.commit()

    if not deleted:
        raise EntryNotFoundError(entry_id)
    logger.info(f"Entry {entry_id} deleted")

def import_entries(records: Iterable[Any], mode: str = "add") -> ImportResult:
    """Bulk import. ``add`` merges with incoming records winning, ``replace`` discards the stored set.

    Structurally invalid records are skipped. Overlaps are not checked here.
    """
    if mode not in IMPORT_MODES:
        raise ValueError(f"Unknown import mode '{mode}'. Use one of {IMPORT_MODES}")

    incoming = []
    skipped = 0
    for record in records:
        entry = parse_entry(record)
        if entry is None:
            skipped += 1
            continue
        incoming.append(entry)

    if mode == "replace":
        result = merge_entries([], incoming)
    else:
        result = merge_entries(load_entries(), incoming)

    save_entries(result)
    logger.info(f"Imported {len(incoming)} entries ({mode}), skipped {skipped} invalid records")

    return ImportResult(mode=mode, imported=len(incoming), skipped=skipped, total_entries=len(result))
