"""
Interest Rate Conversions

Converts annual effective rates to monthly rates using compound
equivalence, so twelve monthly periods reproduce the annual rate exactly.
"""


def annual_to_monthly_rate(annual_rate: float) -> float:
    """
    Convert an effective annual rate to the equivalent monthly rate.

    Args:
        annual_rate: Annual rate as decimal (e.g., 0.089 for 8.9%)

    Returns:
        Monthly rate as decimal

    Raises:
        ValueError: If annual_rate <= -1 (non-positive compounding base)
    """
    if annual_rate <= -1:
        raise ValueError("Annual rate must be greater than -100%")
    return ((1 + annual_rate) ** (1 / 12)) - 1
