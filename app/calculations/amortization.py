"""
Loan Amortization Calculations

Implements the two Brazilian home-loan amortization systems:

- SAC (Sistema de Amortização Constante): equal principal share every month,
  so interest and installment decrease over time.
- PRICE (Sistema Francês): constant installment, matching Excel's PMT().

Summary functions return unrounded values; schedule generators round each
row to cents for display.
"""

from dataclasses import dataclass
from typing import List, Dict, Optional
from datetime import date
from dateutil.relativedelta import relativedelta


@dataclass(frozen=True)
class ScheduleSummary:
    """Headline figures of an amortization schedule."""

    first_installment: float
    last_installment: float
    total_paid: float
    total_interest: float


def _check_loan_terms(principal: float, monthly_rate: float, term_months: int) -> None:
    if principal < 0:
        raise ValueError("Principal cannot be negative")
    if monthly_rate < 0:
        raise ValueError("Monthly rate cannot be negative")
    if isinstance(term_months, bool) or not isinstance(term_months, int):
        raise ValueError("Term must be a whole number of months")
    if term_months < 1:
        raise ValueError("Term must be at least 1 month")


def calculate_sac_summary(
    principal: float, monthly_rate: float, term_months: int
) -> ScheduleSummary:
    """
    Summarize a SAC schedule.

    Args:
        principal: Financed amount
        monthly_rate: Monthly rate as decimal
        term_months: Number of monthly installments

    Returns:
        First and last installment, total paid and total interest

    Raises:
        ValueError: If the loan terms are out of range
    """
    _check_loan_terms(principal, monthly_rate, term_months)

    amortization = principal / term_months
    remaining_principal = principal
    total_paid = 0.0
    first_installment = 0.0
    installment = 0.0

    for month in range(1, term_months + 1):
        interest = remaining_principal * monthly_rate
        installment = amortization + interest

        if month == 1:
            first_installment = installment

        total_paid += installment
        remaining_principal -= amortization

    return ScheduleSummary(
        first_installment=first_installment,
        last_installment=installment,
        total_paid=total_paid,
        total_interest=total_paid - principal,
    )


def calculate_price_payment(
    principal: float, monthly_rate: float, term_months: int
) -> float:
    """
    Calculate the constant PRICE installment.

    Matches Excel's PMT() function. A zero rate falls back to straight-line
    repayment.
    """
    _check_loan_terms(principal, monthly_rate, term_months)

    if monthly_rate == 0:
        return principal / term_months

    growth = (1 + monthly_rate) ** term_months
    return principal * (monthly_rate * growth) / (growth - 1)


def calculate_price_summary(
    principal: float, monthly_rate: float, term_months: int
) -> ScheduleSummary:
    """Summarize a PRICE schedule; first and last installment are equal."""
    installment = calculate_price_payment(principal, monthly_rate, term_months)
    total_paid = installment * term_months

    return ScheduleSummary(
        first_installment=installment,
        last_installment=installment,
        total_paid=total_paid,
        total_interest=total_paid - principal,
    )


def _schedule_row(
    period: int,
    period_date: date,
    balance: float,
    payment: float,
    interest: float,
    principal_pmt: float,
) -> Dict:
    return {
        "period": period,
        "date": period_date.isoformat(),
        "beginning_balance": round(balance, 2),
        "payment": round(payment, 2),
        "interest": round(interest, 2),
        "principal": round(principal_pmt, 2),
        "ending_balance": round(max(0.0, balance - principal_pmt), 2),
    }


def generate_sac_schedule(
    principal: float,
    monthly_rate: float,
    term_months: int,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a full SAC amortization schedule.

    Args:
        principal: Financed amount
        monthly_rate: Monthly rate as decimal
        term_months: Number of monthly installments
        start_date: Date of first payment (defaults to today)

    Returns:
        List of amortization rows
    """
    _check_loan_terms(principal, monthly_rate, term_months)

    if start_date is None:
        start_date = date.today()

    schedule = []
    balance = principal
    amortization = principal / term_months

    for period in range(1, term_months + 1):
        period_date = start_date + relativedelta(months=period - 1)
        interest = balance * monthly_rate

        # Last period settles whatever float residue is left
        principal_pmt = balance if period == term_months else amortization

        schedule.append(
            _schedule_row(
                period,
                period_date,
                balance,
                principal_pmt + interest,
                interest,
                principal_pmt,
            )
        )
        balance = max(0.0, balance - principal_pmt)

    return schedule


def generate_price_schedule(
    principal: float,
    monthly_rate: float,
    term_months: int,
    start_date: Optional[date] = None,
) -> List[Dict]:
    """
    Generate a full PRICE amortization schedule.

    Every row pays the constant installment except the last, which pays
    off the remaining balance exactly.
    """
    payment = calculate_price_payment(principal, monthly_rate, term_months)

    if start_date is None:
        start_date = date.today()

    schedule = []
    balance = principal

    for period in range(1, term_months + 1):
        period_date = start_date + relativedelta(months=period - 1)
        interest = balance * monthly_rate

        if period == term_months:
            principal_pmt = balance
        else:
            principal_pmt = min(payment - interest, balance)

        schedule.append(
            _schedule_row(
                period,
                period_date,
                balance,
                principal_pmt + interest,
                interest,
                principal_pmt,
            )
        )
        balance = max(0.0, balance - principal_pmt)

    return schedule


def calculate_total_interest(schedule: List[Dict]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row["interest"] for row in schedule)


def calculate_total_paid(schedule: List[Dict]) -> float:
    """Calculate total of all installments in a schedule."""
    return sum(row["payment"] for row in schedule)
