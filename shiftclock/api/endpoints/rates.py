import logging

from fastapi import APIRouter
from shiftclock.models.payroll import PayRateConfig
from shiftclock.services.rate_service import load_pay_rates, save_pay_rates, reset_pay_rates

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/pay-rates", response_model=PayRateConfig)
async def get_pay_rates():
    return load_pay_rates()

@router.put("/pay-rates", response_model=PayRateConfig)
async def update_pay_rates(config: PayRateConfig):
    """Save pay rates; fields left out keep their default values"""
    return save_pay_rates(config)

@router.delete("/pay-rates", response_model=PayRateConfig)
async def restore_default_pay_rates():
    return reset_pay_rates()
