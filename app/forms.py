"""
Form parsing for loan simulation requests.

Turns raw form text into a LoanRequest, reporting every bad field at once.
"""

import re
from typing import Any, List, Mapping

from app.calculations.simulation import (
    FieldError,
    LoanRequest,
    LoanValidationError,
    validate_request,
)

DEFAULT_DOWN_PAYMENT_PERCENTAGE = "20"
DEFAULT_TERM_MONTHS = "360"

TRUE_VALUES = {"true", "1", "on", "yes"}
FALSE_VALUES = {"false", "0", "off", "no", ""}


def parse_property_value(raw: Any) -> float:
    """Parse a currency-formatted amount such as 'R$ 300.000' (whole reais)."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    digits = re.sub(r"\D", "", str(raw or ""))
    if not digits:
        raise ValueError("Property value is required")
    return float(digits)


def parse_flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    text = str(raw).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"Not a yes/no value: {raw!r}")


def parse_loan_form(data: Mapping[str, Any]) -> LoanRequest:
    """
    Build a LoanRequest from raw form values.

    Args:
        data: Mapping with property_value, down_payment_percentage,
            term_months and apply_subsidy

    Returns:
        A validated LoanRequest

    Raises:
        LoanValidationError: If any field is unparseable or out of range
    """
    errors: List[FieldError] = []
    parsed = {}

    raw = data.get("property_value")
    try:
        parsed["property_value"] = parse_property_value(raw)
    except ValueError as e:
        errors.append(FieldError("property_value", str(e), raw))

    raw = data.get("down_payment_percentage", DEFAULT_DOWN_PAYMENT_PERCENTAGE)
    try:
        parsed["down_payment_percentage"] = float(str(raw).strip().replace(",", "."))
    except ValueError:
        errors.append(
            FieldError("down_payment_percentage", "Down payment must be a number", raw)
        )

    raw = data.get("term_months", DEFAULT_TERM_MONTHS)
    try:
        parsed["term_months"] = int(str(raw).strip())
    except ValueError:
        errors.append(FieldError("term_months", "Term must be a whole number", raw))

    raw = data.get("apply_subsidy")
    try:
        parsed["apply_subsidy"] = parse_flag(raw)
    except ValueError as e:
        errors.append(FieldError("apply_subsidy", str(e), raw))

    unparsed = {error.field for error in errors}
    request = LoanRequest(
        property_value=parsed.get("property_value"),
        down_payment_percentage=parsed.get("down_payment_percentage"),
        term_months=parsed.get("term_months"),
        apply_subsidy=parsed.get("apply_subsidy"),
    )
    errors.extend(
        error for error in validate_request(request) if error.field not in unparsed
    )
    if errors:
        raise LoanValidationError(errors)
    return request
