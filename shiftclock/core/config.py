import os
from typing import List
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

def parse_list_env(env_var: str, default: List[str] = None) -> List[str]:
    """Parse comma-separated environment variable into list"""
    if default is None:
        default = []

    value = os.getenv(env_var, "")
    if not value.strip():
        return default

    return [item.strip() for item in value.split(",") if item.strip()]

def parse_bool_env(env_var: str, default: bool = False) -> bool:
    """Parse boolean environment variable"""
    return os.getenv(env_var, str(default)).lower() in ("true", "1", "yes", "on")

def parse_float_env(env_var: str, default: float) -> float:
    """Parse numeric environment variable, falling back to default when unset"""
    value = os.getenv(env_var, "")
    if not value.strip():
        return default
    return float(value)

class ServerConfig:
    """Server Configuration from Environment"""

    # Server settings
    HOST = os.getenv("SHIFTCLOCK_HOST", "127.0.0.1")
    PORT = int(os.getenv("SHIFTCLOCK_PORT", "8000"))
    WORKERS = int(os.getenv("SHIFTCLOCK_WORKERS", "1"))
    LOG_LEVEL = os.getenv("SHIFTCLOCK_LOG_LEVEL", "info")

    # Database settings
    DATABASE_PATH = os.getenv("DATABASE_PATH", "shiftclock.db")

    # Development settings
    ENABLE_API_DOCS = parse_bool_env("ENABLE_API_DOCS", True)

    # CORS settings
    CORS_ORIGINS = parse_list_env("CORS_ORIGINS", ["*"])

    # App metadata
    APP_NAME = os.getenv("APP_NAME", "Shift Clock")
    APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
    APP_DESCRIPTION = os.getenv("APP_DESCRIPTION", "Personal shift tracking with tiered pay estimates")

class PayRateDefaults:
    """Pay rate defaults used until the user saves their own.

    Based on the NALC National Agreement for City Letter Carriers
    (Grade 1, Step BB career carrier). Verify against the current agreement.
    """

    BASE_HOURLY_RATE = parse_float_env("BASE_HOURLY_RATE", 23.49)
    OVERTIME_MULTIPLIER = parse_float_env("OVERTIME_MULTIPLIER", 1.5)
    PENALTY_OVERTIME_MULTIPLIER = parse_float_env("PENALTY_OVERTIME_MULTIPLIER", 2.0)
    NIGHT_DIFFERENTIAL_RATE = parse_float_env("NIGHT_DIFFERENTIAL_RATE", 1.08)
    SUNDAY_PREMIUM_PERCENT = parse_float_env("SUNDAY_PREMIUM_PERCENT", 25)

    # Overtime thresholds (hours)
    DAILY_OVERTIME_THRESHOLD_HOURS = parse_float_env("DAILY_OVERTIME_THRESHOLD_HOURS", 8)
    DAILY_PENALTY_OT_THRESHOLD_HOURS = parse_float_env("DAILY_PENALTY_OT_THRESHOLD_HOURS", 10)
    WEEKLY_OVERTIME_THRESHOLD_HOURS = parse_float_env("WEEKLY_OVERTIME_THRESHOLD_HOURS", 40)
    WEEKLY_PENALTY_OT_THRESHOLD_HOURS = parse_float_env("WEEKLY_PENALTY_OT_THRESHOLD_HOURS", 56)

    # Night differential window, local HH:MM, may wrap past midnight
    NIGHT_DIFF_START_TIME = os.getenv("NIGHT_DIFF_START_TIME", "18:00")
    NIGHT_DIFF_END_TIME = os.getenv("NIGHT_DIFF_END_TIME", "06:00")
