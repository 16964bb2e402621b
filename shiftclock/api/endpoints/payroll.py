import logging
from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from shiftclock.models.payroll import PeriodSummary, WeekBreakdown, MonthBreakdown, YearBreakdown
from shiftclock.services.entry_service import load_entries
from shiftclock.services.hours_service import local_wall_time
from shiftclock.services.payroll_service import (
    calculate_pay_summary, calculate_week_breakdown, calculate_month_breakdown,
    calculate_year_breakdown, filter_entries_by_range,
)
from shiftclock.services.rate_service import load_pay_rates

router = APIRouter()
logger = logging.getLogger(__name__)

def parse_date(value: str) -> date:
    return datetime.strptime(value, '%Y-%m-%d').date()

@router.get("/payroll/summary", response_model=PeriodSummary)
async def get_period_summary(
    start_date: str,  # YYYY-MM-DD
    end_date: str,    # YYYY-MM-DD, inclusive
):
    """Pay summary for shifts clocking in between two local dates.

    Weekly thresholds apply to the whole range, so pass a single week for
    accurate overtime.
    """
    try:
        start = parse_date(start_date)
        end = parse_date(end_date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    if end < start:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")

    try:
        entries = filter_entries_by_range(
            load_entries(),
            local_wall_time(start),
            local_wall_time(end + timedelta(days=1)),
            exclusive_end=True,
        )
        summary = calculate_pay_summary(entries, load_pay_rates())
    except Exception as e:
        logger.error(f"Error generating pay summary: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate pay summary")

    return PeriodSummary(
        start_date=start_date,
        end_date=end_date,
        entry_count=len(entries),
        open_entry_count=sum(1 for e in entries if e.clock_out is None),
        summary=summary,
    )

@router.get("/payroll/week", response_model=WeekBreakdown)
async def get_week_breakdown(week_of: Optional[str] = None):
    """Per-day breakdown of the Monday-Sunday week containing ``week_of`` (default today)"""
    try:
        day = parse_date(week_of) if week_of else date.today()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    try:
        return calculate_week_breakdown(load_entries(), day, load_pay_rates())
    except Exception as e:
        logger.error(f"Error generating week breakdown: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate week breakdown")

@router.get("/payroll/month", response_model=MonthBreakdown)
async def get_month_breakdown(
    year: int = Query(..., ge=1, le=9998),
    month: int = Query(..., ge=1, le=12),
):
    """Weekly breakdown for the weeks whose Monday falls in the month"""
    try:
        return calculate_month_breakdown(load_entries(), year, month, load_pay_rates())
    except Exception as e:
        logger.error(f"Error generating month breakdown: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate month breakdown")

@router.get("/payroll/year", response_model=YearBreakdown)
async def get_year_breakdown(year: int = Query(..., ge=1, le=9998)):
    try:
        return calculate_year_breakdown(load_entries(), year, load_pay_rates())
    except Exception as e:
        logger.error(f"Error generating year breakdown: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate year breakdown")
