from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import datetime
from typing import Optional, List, Any, Dict

class TimeEntry(BaseModel):
    """One shift. ``clock_out`` of None means the shift is still open."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    clock_in: datetime = Field(alias="clockIn")
    clock_out: Optional[datetime] = Field(default=None, alias="clockOut")
    notes: str = ""

    @field_validator("clock_out", mode="before")
    @classmethod
    def empty_clock_out_is_open(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("clock_in", "clock_out")
    @classmethod
    def to_local_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are read as local wall-clock time
        if value is None:
            return value
        return value.astimezone()

    @model_validator(mode="after")
    def check_clock_out_after_clock_in(self) -> "TimeEntry":
        if self.clock_out is not None and self.clock_out <= self.clock_in:
            raise ValueError("clockOut must be after clockIn")
        return self

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

class ClockResponse(BaseModel):
    success: bool
    clock_type: str  # "IN" or "OUT"
    timestamp: datetime
    message: str
    entry: TimeEntry

class ImportRequest(BaseModel):
    """Bulk import payload; records are validated one by one"""
    mode: str = Field(default="add", pattern="^(add|replace)$")
    entries: List[Dict[str, Any]]

class ImportResult(BaseModel):
    mode: str
    imported: int
    skipped: int
    total_entries: int

class EntryCheckResult(BaseModel):
    """Independent results of the three entry checks"""
    structurally_valid: bool
    no_overlap: bool
    single_open_consistent: bool
    valid: bool
    message: Optional[str] = None
