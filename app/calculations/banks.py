"""
Bank Offer Table

Static reference data for the banks compared by the simulator. The table is
built once at import time and never mutated.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class BankOffer:
    """A bank's home-loan offer."""

    name: str
    annual_rate: float  # Effective annual rate as decimal
    subsidy_eligible: bool = False  # Honors the Minha Casa Minha Vida subsidy


def build_bank_table(offers: Iterable[BankOffer]) -> Tuple[BankOffer, ...]:
    """
    Freeze a sequence of offers into a bank table.

    Raises:
        ValueError: If the table is empty, a rate is not positive, or a
            bank name appears twice
    """
    table = tuple(offers)
    if not table:
        raise ValueError("At least one bank is required")

    seen = set()
    for offer in table:
        if not offer.annual_rate > 0:
            raise ValueError(f"Annual rate for {offer.name} must be positive")
        if offer.name in seen:
            raise ValueError(f"Duplicate bank: {offer.name}")
        seen.add(offer.name)

    return table


BANKS = build_bank_table(
    [
        BankOffer(name="Caixa", annual_rate=0.089, subsidy_eligible=True),
        BankOffer(name="Bradesco", annual_rate=0.0935),
        BankOffer(name="Itaú", annual_rate=0.0925),
        BankOffer(name="Santander", annual_rate=0.094),
    ]
)

SUBSIDY_AMOUNT = 30000.0


def get_bank(name: str, banks: Tuple[BankOffer, ...] = BANKS) -> BankOffer:
    """Look up a bank by name."""
    for offer in banks:
        if offer.name == name:
            return offer
    raise UnknownBankError(name)


class UnknownBankError(KeyError):
    """Raised when a bank is not part of the configured table."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown bank: {self.name}"
