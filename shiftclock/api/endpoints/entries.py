import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from shiftclock.core.exceptions import EntryNotFoundError, EntryValidationError
from shiftclock.models.entries import TimeEntry, ClockResponse, ImportRequest, ImportResult, EntryCheckResult
from shiftclock.services.entry_service import (
    load_entries, get_open_entry, toggle_clock, update_entry, delete_entry, import_entries,
)
from shiftclock.services.hours_service import format_duration
from shiftclock.services.validation_service import (
    parse_entry, has_no_overlap, is_single_open_consistent,
    INVALID_ENTRY_MESSAGE, OVERLAP_MESSAGE, OPEN_NOT_LAST_MESSAGE,
)

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/entries", response_model=List[TimeEntry])
async def list_entries():
    """All entries, oldest first"""
    return load_entries()

@router.get("/entries/open", response_model=Optional[TimeEntry])
async def get_current_shift():
    """The in-progress shift, or null"""
    return get_open_entry(load_entries())

@router.post("/entries/clock", response_model=ClockResponse)
async def clock_in_or_out():
    """Clock out of the open shift, or clock in when none is open"""
    try:
        clock_type, entry = toggle_clock()
    except EntryValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)

    if clock_type == "OUT":
        timestamp = entry.clock_out
        message = (
            f"Successfully clocked out at {timestamp.strftime('%I:%M %p')} "
            f"({format_duration(entry.clock_in, entry.clock_out)})"
        )
    else:
        timestamp = entry.clock_in
        message = f"Successfully clocked in at {timestamp.strftime('%I:%M %p')}"

    return ClockResponse(
        success=True,
        clock_type=clock_type,
        timestamp=timestamp,
        message=message,
        entry=entry,
    )

@router.put("/entries/{entry_id}", response_model=TimeEntry)
async def edit_entry(entry_id: str, record: Dict[str, Any]):
    """Replace clock-in, clock-out and notes of an existing entry"""
    try:
        return update_entry({**record, "id": entry_id})
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EntryValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)

@router.delete("/entries/{entry_id}")
async def remove_entry(entry_id: str):
    try:
        delete_entry(entry_id)
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "deleted": entry_id}

@router.post("/entries/import", response_model=ImportResult)
async def import_entry_records(request: ImportRequest):
    """Merge records into the stored entries (add) or replace them"""
    try:
        return import_entries(request.entries, mode=request.mode)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.post("/entries/validate", response_model=EntryCheckResult)
async def check_entry_record(record: Dict[str, Any]):
    """Run every entry check against the stored entries without saving"""
    entry = parse_entry(record)
    if entry is None:
        return EntryCheckResult(
            structurally_valid=False,
            no_overlap=False,
            single_open_consistent=False,
            valid=False,
            message=INVALID_ENTRY_MESSAGE,
        )

    entries = load_entries()
    no_overlap = has_no_overlap(entry, entries)
    single_open = is_single_open_consistent(entry, entries)

    message = None
    if not no_overlap:
        message = OVERLAP_MESSAGE
    elif not single_open:
        message = OPEN_NOT_LAST_MESSAGE

    return EntryCheckResult(
        structurally_valid=True,
        no_overlap=no_overlap,
        single_open_consistent=single_open,
        valid=no_overlap and single_open,
        message=message,
    )
