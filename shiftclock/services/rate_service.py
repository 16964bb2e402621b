import json
import logging

from pydantic import ValidationError

from shiftclock.core.database import get_db
from shiftclock.models.payroll import PayRateConfig

logger = logging.getLogger(__name__)

SETTINGS_KEY = "pay_rates"

def load_pay_rates() -> PayRateConfig:
    """Stored pay rates laid over the defaults; defaults if nothing usable is stored"""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM settings WHERE name = ?", (SETTINGS_KEY,))
        row = cursor.fetchone()

    if row is None:
        return PayRateConfig()

    try:
        stored = json.loads(row['value'])
    except json.JSONDecodeError as e:
        logger.warning(f"Stored pay rates are not valid JSON, using defaults: {e}")
        return PayRateConfig()

    if not isinstance(stored, dict):
        return PayRateConfig()

    merged = {**PayRateConfig().model_dump(by_alias=True), **stored}
    try:
        return PayRateConfig.model_validate(merged)
    except ValidationError as e:
        logger.warning(f"Stored pay rates failed validation, using defaults: {e}")
        return PayRateConfig()

def save_pay_rates(config: PayRateConfig) -> PayRateConfig:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute('''
            INSERT OR REPLACE INTO settings (name, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
        ''', (SETTINGS_KEY, json.dumps(config.model_dump(by_alias=True))))
        conn.commit()

    logger.info("Pay rates saved")
    return config

def reset_pay_rates() -> PayRateConfig:
    """Forget saved pay rates so the defaults apply again"""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM settings WHERE name = ?", (SETTINGS_KEY,))
        conn.commit()

    logger.info("Pay rates reset to defaults")
    return PayRateConfig()
