"""
Loan Simulation

Validates a loan request and fans it out across every configured bank and
both amortization systems.
"""

import enum
import logging
import math
from dataclasses import dataclass, asdict
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from app.calculations.amortization import (
    ScheduleSummary,
    calculate_price_summary,
    calculate_sac_summary,
    calculate_total_interest,
    calculate_total_paid,
    generate_price_schedule,
    generate_sac_schedule,
)
from app.calculations.banks import BANKS, SUBSIDY_AMOUNT, BankOffer, get_bank
from app.calculations.rates import annual_to_monthly_rate

logger = logging.getLogger(__name__)

MIN_PROPERTY_VALUE = 50000
MIN_DOWN_PAYMENT_PERCENTAGE = 10
MAX_DOWN_PAYMENT_PERCENTAGE = 80
MIN_TERM_MONTHS = 12
MAX_TERM_MONTHS = 420


class AmortizationMethod(str, enum.Enum):
    """Amortization system."""
    SAC = "SAC"
    PRICE = "PRICE"


@dataclass(frozen=True)
class LoanRequest:
    """A single simulation request."""

    property_value: float
    down_payment_percentage: float  # Percent, e.g. 20 for 20%
    term_months: int
    apply_subsidy: bool = False


@dataclass(frozen=True)
class SimulationResult:
    """Schedule summary for one bank under one amortization method."""

    bank: str
    method: AmortizationMethod
    financed_amount: float
    monthly_rate: float
    first_installment: float
    last_installment: float
    total_paid: float
    total_interest: float

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["method"] = self.method.value
        return data


@dataclass(frozen=True)
class FieldError:
    """A request field that failed validation."""

    field: str
    message: str
    value: object = None

    def to_dict(self) -> Dict:
        """JSON-safe form; NaN and infinity become None."""
        return {
            "field": self.field,
            "message": self.message,
            "value": _json_safe(self.value),
        }


def _json_safe(value):
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


class LoanValidationError(ValueError):
    """Raised when a loan request fails range validation."""

    def __init__(self, errors: Sequence[FieldError]):
        self.errors = list(errors)
        fields = ", ".join(error.field for error in self.errors)
        super().__init__(f"Invalid loan request: {fields}")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_request(request: LoanRequest) -> List[FieldError]:
    """
    Check every field of a request against its allowed range.

    Returns:
        One FieldError per failing field; empty when the request is valid
    """
    errors = []

    value = request.property_value
    if not _is_number(value) or not math.isfinite(value) or value < MIN_PROPERTY_VALUE:
        errors.append(
            FieldError(
                "property_value",
                f"Property value must be at least {MIN_PROPERTY_VALUE:,}",
                value,
            )
        )

    value = request.down_payment_percentage
    if (
        not _is_number(value)
        or not math.isfinite(value)
        or not MIN_DOWN_PAYMENT_PERCENTAGE <= value <= MAX_DOWN_PAYMENT_PERCENTAGE
    ):
        errors.append(
            FieldError(
                "down_payment_percentage",
                f"Down payment must be between {MIN_DOWN_PAYMENT_PERCENTAGE}% "
                f"and {MAX_DOWN_PAYMENT_PERCENTAGE}%",
                value,
            )
        )

    value = request.term_months
    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or not MIN_TERM_MONTHS <= value <= MAX_TERM_MONTHS
    ):
        errors.append(
            FieldError(
                "term_months",
                f"Term must be between {MIN_TERM_MONTHS} and {MAX_TERM_MONTHS} months",
                value,
            )
        )

    if not isinstance(request.apply_subsidy, bool):
        errors.append(
            FieldError("apply_subsidy", "Subsidy flag must be true or false", request.apply_subsidy)
        )

    return errors


def ensure_valid(request: LoanRequest) -> None:
    """Raise LoanValidationError if the request has any invalid field."""
    errors = validate_request(request)
    if errors:
        raise LoanValidationError(errors)


def calculate_financed_amount(
    request: LoanRequest, bank: BankOffer, subsidy_amount: float = SUBSIDY_AMOUNT
) -> float:
    """
    Derive the principal actually financed with a bank.

    The down payment comes off first; the subsidy is then deducted only when
    requested and honored by the bank, never taking the amount below zero.

    Raises:
        ValueError: If subsidy_amount is negative
    """
    if subsidy_amount < 0:
        raise ValueError("Subsidy amount cannot be negative")

    down_payment = request.property_value * (request.down_payment_percentage / 100)
    principal = request.property_value - down_payment

    if request.apply_subsidy and bank.subsidy_eligible:
        principal = max(0.0, principal - subsidy_amount)

    return principal


def _summarize(
    method: AmortizationMethod, principal: float, monthly_rate: float, term_months: int
) -> ScheduleSummary:
    if method is AmortizationMethod.SAC:
        return calculate_sac_summary(principal, monthly_rate, term_months)
    return calculate_price_summary(principal, monthly_rate, term_months)


def simulate(
    request: LoanRequest,
    banks: Tuple[BankOffer, ...] = BANKS,
    subsidy_amount: float = SUBSIDY_AMOUNT,
) -> List[SimulationResult]:
    """
    Simulate a loan with every bank under SAC and PRICE.

    Args:
        request: Loan request
        banks: Bank table, in display order
        subsidy_amount: Subsidy deducted for eligible banks

    Returns:
        Two results per bank, in bank order, SAC before PRICE

    Raises:
        LoanValidationError: If any request field is out of range
        ValueError: If subsidy_amount is negative
    """
    ensure_valid(request)

    results = []
    for bank in banks:
        financed_amount = calculate_financed_amount(request, bank, subsidy_amount)
        monthly_rate = annual_to_monthly_rate(bank.annual_rate)

        for method in AmortizationMethod:
            summary = _summarize(method, financed_amount, monthly_rate, request.term_months)
            results.append(
                SimulationResult(
                    bank=bank.name,
                    method=method,
                    financed_amount=financed_amount,
                    monthly_rate=monthly_rate,
                    first_installment=summary.first_installment,
                    last_installment=summary.last_installment,
                    total_paid=summary.total_paid,
                    total_interest=summary.total_interest,
                )
            )

    logger.debug(
        "Simulated %d results for property value %s over %d months",
        len(results),
        request.property_value,
        request.term_months,
    )
    return results


def simulate_schedule(
    request: LoanRequest,
    bank_name: str,
    method: AmortizationMethod,
    start_date: Optional[date] = None,
    banks: Tuple[BankOffer, ...] = BANKS,
    subsidy_amount: float = SUBSIDY_AMOUNT,
) -> Dict:
    """
    Generate the month-by-month schedule for one bank and method.

    Raises:
        LoanValidationError: If any request field is out of range
        UnknownBankError: If the bank is not in the table
    """
    ensure_valid(request)
    bank = get_bank(bank_name, banks)
    method = AmortizationMethod(method)

    financed_amount = calculate_financed_amount(request, bank, subsidy_amount)
    monthly_rate = annual_to_monthly_rate(bank.annual_rate)

    if method is AmortizationMethod.SAC:
        schedule = generate_sac_schedule(
            financed_amount, monthly_rate, request.term_months, start_date
        )
    else:
        schedule = generate_price_schedule(
            financed_amount, monthly_rate, request.term_months, start_date
        )

    return {
        "bank": bank.name,
        "method": method.value,
        "financed_amount": financed_amount,
        "monthly_rate": monthly_rate,
        "total_paid": round(calculate_total_paid(schedule), 2),
        "total_interest": round(calculate_total_interest(schedule), 2),
        "schedule": schedule,
    }


def find_best_option(results: Sequence[SimulationResult]) -> SimulationResult:
    """Return the result with the lowest total paid (first one on ties)."""
    if not results:
        raise ValueError("No simulation results to compare")
    return min(results, key=lambda result: result.total_paid)


def group_by_bank(
    results: Sequence[SimulationResult],
) -> Dict[str, Dict[AmortizationMethod, SimulationResult]]:
    """Group results by bank, keeping bank order."""
    grouped = {}
    for result in results:
        grouped.setdefault(result.bank, {})[result.method] = result
    return grouped
