"""Payment methods and synchronous card validation for the checkout step."""

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import Enum

from protean.exceptions import ValidationError

_EXPIRY_PATTERN = re.compile(r"^(0[1-9]|1[0-2])/(\d{2})$")


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    CASH = "cash"


@dataclass(frozen=True)
class CardDetails:
    number: str
    holder_name: str
    expiry: str
    cvv: str

    @property
    def last4(self) -> str:
        return self.number[-4:]


def parse_method(value: str | None) -> PaymentMethod:
    try:
        return PaymentMethod((value or "").strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise ValidationError({"method": [f"Payment method must be one of: {allowed}"]}) from None


def validate_card(
    number: str | None,
    holder_name: str | None,
    expiry: str | None,
    cvv: str | None,
    today: date | None = None,
) -> CardDetails:
    """Validate card fields, collecting one message per failing field.

    Raises ValidationError with keys ``card_number``, ``card_name``,
    ``expiry_date`` and ``cvv``.
    """
    today = today or datetime.now(UTC).date()
    errors: dict[str, list[str]] = {}

    digits = re.sub(r"\s+", "", number or "")
    if not digits:
        errors["card_number"] = ["Card number is required"]
    elif not digits.isdigit() or len(digits) != 16:
        errors["card_number"] = ["Card number must be 16 digits"]

    if not (holder_name or "").strip():
        errors["card_name"] = ["Cardholder name is required"]

    expiry = (expiry or "").strip()
    if not expiry:
        errors["expiry_date"] = ["Expiry date is required"]
    else:
        match = _EXPIRY_PATTERN.match(expiry)
        if match is None:
            errors["expiry_date"] = ["Invalid expiry date"]
        else:
            month, year = int(match.group(1)), int(match.group(2))
            current_year = today.year % 100
            if year < current_year or (year == current_year and month < today.month):
                errors["expiry_date"] = ["Card has expired"]

    cvv = (cvv or "").strip()
    if not cvv:
        errors["cvv"] = ["CVV is required"]
    elif not cvv.isdigit() or len(cvv) not in (3, 4):
        errors["cvv"] = ["CVV must be 3 digits"]

    if errors:
        raise ValidationError(errors)

    return CardDetails(number=digits, holder_name=holder_name.strip(), expiry=expiry, cvv=cvv)
