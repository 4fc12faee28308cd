"""
Print a SAC vs PRICE comparison across all configured banks.

Usage:
    python scripts/compare_banks.py 300000 --down-payment 20 --term 360 --subsidy
"""
import argparse
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.calculations.simulation import (
    LoanRequest,
    LoanValidationError,
    find_best_option,
    group_by_bank,
    simulate,
)
from app.config import get_settings


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compare home-loan offers")
    parser.add_argument("property_value", type=float)
    parser.add_argument("--down-payment", type=float, default=20)
    parser.add_argument("--term", type=int, default=360)
    parser.add_argument("--subsidy", action="store_true")
    args = parser.parse_args(argv)

    request = LoanRequest(
        property_value=args.property_value,
        down_payment_percentage=args.down_payment,
        term_months=args.term,
        apply_subsidy=args.subsidy,
    )

    try:
        results = simulate(request, subsidy_amount=get_settings().subsidy_amount)
    except LoanValidationError as e:
        for error in e.errors:
            print(f"{error.field}: {error.message} (got {error.value!r})")
        return 1

    best = find_best_option(results)

    print(f"{'Bank':<12}{'Method':<8}{'Financed':>14}{'1st':>12}{'Last':>12}"
          f"{'Total paid':>16}{'Interest':>16}")
    for methods in group_by_bank(results).values():
        for result in methods.values():
            marker = " *" if result is best else ""
            print(
                f"{result.bank:<12}{result.method.value:<8}"
                f"{result.financed_amount:>14,.2f}"
                f"{result.first_installment:>12,.2f}"
                f"{result.last_installment:>12,.2f}"
                f"{result.total_paid:>16,.2f}"
                f"{result.total_interest:>16,.2f}{marker}"
            )

    print(f"\nBest option: {best.bank} ({best.method.value})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
