class ShiftClockError(Exception):
    """Base error for entry store operations"""


class EntryNotFoundError(ShiftClockError):
    def __init__(self, entry_id: str):
        super().__init__(f"Entry {entry_id} not found")
        self.entry_id = entry_id


class EntryValidationError(ShiftClockError):
    """Raised when an edit or insert would break an entry invariant.

    ``reason`` is one of ``invalid``, ``overlap`` or ``open_not_last`` so
    callers can report each failure separately.
    """

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message
