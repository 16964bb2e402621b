import logging

from fastapi import APIRouter
from shiftclock.core.config import ServerConfig # Import configs
from shiftclock.services.entry_service import load_entries, get_open_entry

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/")
async def root():
    entries = load_entries()
    open_entry = get_open_entry(entries)
    return {
        "message": ServerConfig.APP_NAME,
        "version": ServerConfig.APP_VERSION,
        "description": ServerConfig.APP_DESCRIPTION,
        "status": "running",
        "entry_count": len(entries),
        "clocked_in": open_entry is not None,
        "open_entry_id": open_entry.id if open_entry else None,
    }
