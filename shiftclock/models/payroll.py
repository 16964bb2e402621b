from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import List

from shiftclock.core.config import PayRateDefaults

HHMM_PATTERN = r"^\d{1,2}:\d{2}$"

class PayRateConfig(BaseModel):
    """Pay rates and overtime thresholds, read-only to the pay engine"""
    model_config = ConfigDict(populate_by_name=True)

    base_hourly_rate: float = Field(default=PayRateDefaults.BASE_HOURLY_RATE, alias="baseHourlyRate")
    overtime_multiplier: float = Field(default=PayRateDefaults.OVERTIME_MULTIPLIER, alias="overtimeMultiplier")
    penalty_overtime_multiplier: float = Field(
        default=PayRateDefaults.PENALTY_OVERTIME_MULTIPLIER, alias="penaltyOvertimeMultiplier"
    )
    night_differential_rate: float = Field(
        default=PayRateDefaults.NIGHT_DIFFERENTIAL_RATE, alias="nightDifferentialRate"
    )
    sunday_premium_percent: float = Field(default=PayRateDefaults.SUNDAY_PREMIUM_PERCENT, alias="sundayPremiumPercent")
    daily_overtime_threshold_hours: float = Field(
        default=PayRateDefaults.DAILY_OVERTIME_THRESHOLD_HOURS, alias="dailyOvertimeThresholdHours"
    )
    daily_penalty_ot_threshold_hours: float = Field(
        default=PayRateDefaults.DAILY_PENALTY_OT_THRESHOLD_HOURS, alias="dailyPenaltyOTThresholdHours"
    )
    weekly_overtime_threshold_hours: float = Field(
        default=PayRateDefaults.WEEKLY_OVERTIME_THRESHOLD_HOURS, alias="weeklyOvertimeThresholdHours"
    )
    weekly_penalty_ot_threshold_hours: float = Field(
        default=PayRateDefaults.WEEKLY_PENALTY_OT_THRESHOLD_HOURS, alias="weeklyPenaltyOTThresholdHours"
    )
    night_diff_start_time: str = Field(
        default=PayRateDefaults.NIGHT_DIFF_START_TIME, alias="nightDiffStartTime", pattern=HHMM_PATTERN
    )
    night_diff_end_time: str = Field(
        default=PayRateDefaults.NIGHT_DIFF_END_TIME, alias="nightDiffEndTime", pattern=HHMM_PATTERN
    )

class PaySummary(BaseModel):
    """Tiered pay breakdown for a set of entries"""
    model_config = ConfigDict(populate_by_name=True)

    total_hours: float = Field(default=0.0, alias="totalHours")
    base_hours: float = Field(default=0.0, alias="baseHours")
    ot_hours: float = Field(default=0.0, alias="otHours")
    penalty_ot_hours: float = Field(default=0.0, alias="penaltyOTHours")
    night_diff_hours: float = Field(default=0.0, alias="nightDiffHours")
    sunday_hours: float = Field(default=0.0, alias="sundayHours")
    base_pay: float = Field(default=0.0, alias="basePay")
    ot_pay: float = Field(default=0.0, alias="otPay")
    penalty_ot_pay: float = Field(default=0.0, alias="penaltyOTPay")
    night_diff_pay: float = Field(default=0.0, alias="nightDiffPay")
    sunday_premium_pay: float = Field(default=0.0, alias="sundayPremiumPay")
    estimated_pay: float = Field(default=0.0, alias="estimatedPay")

class DayBreakdown(BaseModel):
    """One row of a week view"""
    day: date
    weekday: str
    summary: PaySummary

class WeekBreakdown(BaseModel):
    week_start: date  # Monday
    week_end: date    # Sunday
    days: List[DayBreakdown]
    total: PaySummary

class WeekRow(BaseModel):
    week_start: date
    week_end: date
    summary: PaySummary

class MonthBreakdown(BaseModel):
    year: int
    month: int
    month_name: str
    weeks: List[WeekRow]
    total: PaySummary

class MonthRow(BaseModel):
    month: int
    month_name: str
    summary: PaySummary

class YearBreakdown(BaseModel):
    year: int
    months: List[MonthRow]
    total: PaySummary

class PeriodSummary(BaseModel):
    """Pay summary for an arbitrary date range"""
    start_date: str
    end_date: str
    entry_count: int
    open_entry_count: int
    summary: PaySummary
