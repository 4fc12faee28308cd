"""
Bank table API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List

from app.calculations.banks import BANKS
from app.calculations.rates import annual_to_monthly_rate
from app.config import get_settings

router = APIRouter()


class BankResponse(BaseModel):
    """A configured bank offer."""

    name: str
    annual_rate: float
    monthly_rate: float
    subsidy_eligible: bool


class BankListResponse(BaseModel):
    """All configured banks plus the subsidy they may honor."""

    banks: List[BankResponse]
    subsidy_amount: float


@router.get("", response_model=BankListResponse)
async def list_banks():
    """List banks in comparison order."""
    return BankListResponse(
        banks=[
            BankResponse(
                name=bank.name,
                annual_rate=bank.annual_rate,
                monthly_rate=annual_to_monthly_rate(bank.annual_rate),
                subsidy_eligible=bank.subsidy_eligible,
            )
            for bank in BANKS
        ],
        subsidy_amount=get_settings().subsidy_amount,
    )
