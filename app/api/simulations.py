"""
Loan simulation API endpoints.

These endpoints accept a loan request and return raw calculated results;
formatting for display is left to the client.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.calculations.banks import UnknownBankError
from app.calculations.simulation import (
    AmortizationMethod,
    LoanRequest,
    LoanValidationError,
    find_best_option,
    simulate,
    simulate_schedule,
)
from app.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class SimulationInput(BaseModel):
    """Input for a loan simulation."""

    property_value: float = Field(..., allow_inf_nan=False)
    down_payment_percentage: float = Field(default=20, allow_inf_nan=False)
    term_months: int = 360
    apply_subsidy: bool = False

    def to_request(self) -> LoanRequest:
        return LoanRequest(
            property_value=self.property_value,
            down_payment_percentage=self.down_payment_percentage,
            term_months=self.term_months,
            apply_subsidy=self.apply_subsidy,
        )


class SimulationResultResponse(BaseModel):
    """One bank/method result."""

    bank: str
    method: AmortizationMethod
    financed_amount: float
    monthly_rate: float
    first_installment: float
    last_installment: float
    total_paid: float
    total_interest: float


class SimulationResponse(BaseModel):
    """Response with all bank/method results."""

    results: List[SimulationResultResponse]
    best_option: SimulationResultResponse


class ScheduleInput(SimulationInput):
    """Input for a month-by-month schedule."""

    bank: str
    method: AmortizationMethod
    start_date: Optional[date] = None


class ScheduleRowResponse(BaseModel):
    """One month of an amortization schedule."""

    period: int
    date: str
    beginning_balance: float
    payment: float
    interest: float
    principal: float
    ending_balance: float


class ScheduleResponse(BaseModel):
    """Response with a full amortization schedule."""

    bank: str
    method: AmortizationMethod
    financed_amount: float
    monthly_rate: float
    total_paid: float
    total_interest: float
    schedule: List[ScheduleRowResponse]


def _validation_failed(error: LoanValidationError) -> HTTPException:
    logger.info(f"Rejected loan request: {error}")
    return HTTPException(
        status_code=422,
        detail=[field_error.to_dict() for field_error in error.errors],
    )


@router.post("", response_model=SimulationResponse)
async def run_simulation(inputs: SimulationInput):
    """Compare every bank under SAC and PRICE."""
    settings = get_settings()

    try:
        results = simulate(inputs.to_request(), subsidy_amount=settings.subsidy_amount)
    except LoanValidationError as e:
        raise _validation_failed(e)

    return SimulationResponse(
        results=[result.to_dict() for result in results],
        best_option=find_best_option(results).to_dict(),
    )


@router.post("/schedule", response_model=ScheduleResponse)
async def run_schedule(inputs: ScheduleInput):
    """Generate the amortization schedule for one bank and method."""
    settings = get_settings()

    try:
        return simulate_schedule(
            inputs.to_request(),
            inputs.bank,
            inputs.method,
            start_date=inputs.start_date,
            subsidy_amount=settings.subsidy_amount,
        )
    except LoanValidationError as e:
        raise _validation_failed(e)
    except UnknownBankError as e:
        raise HTTPException(status_code=404, detail=str(e))
