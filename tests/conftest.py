import time
from datetime import datetime
from typing import Optional

import pytest

from shiftclock.core.config import ServerConfig
from shiftclock.core.database import init_database
from shiftclock.models.entries import TimeEntry
from shiftclock.models.payroll import PayRateConfig


@pytest.fixture(autouse=True)
def local_timezone(monkeypatch):
    """Pin the process time zone; US Eastern has a DST switch on 2026-03-08."""
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def database(tmp_path, monkeypatch):
    db_path = tmp_path / "shiftclock-test.db"
    monkeypatch.setattr(ServerConfig, "DATABASE_PATH", str(db_path))
    init_database()
    return db_path


@pytest.fixture
def config():
    """Default carrier rates with explicit values so expectations stay fixed"""
    return PayRateConfig(
        base_hourly_rate=20.0,
        overtime_multiplier=1.5,
        penalty_overtime_multiplier=2.0,
        night_differential_rate=1.08,
        sunday_premium_percent=25,
        daily_overtime_threshold_hours=8,
        daily_penalty_ot_threshold_hours=10,
        weekly_overtime_threshold_hours=40,
        weekly_penalty_ot_threshold_hours=56,
        night_diff_start_time="18:00",
        night_diff_end_time="06:00",
    )


def make_entry(entry_id: str, clock_in: datetime, clock_out: Optional[datetime] = None, notes: str = "") -> TimeEntry:
    return TimeEntry(id=entry_id, clock_in=clock_in, clock_out=clock_out, notes=notes)
