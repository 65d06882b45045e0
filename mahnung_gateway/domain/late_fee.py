"""Late-payment calculator - statutory default interest and flat fee"""

import logging
from decimal import Decimal, localcontext
from typing import Any, Dict

from mahnung_gateway.domain.exceptions import InvalidInputError
from mahnung_gateway.domain.models import ClientClassification, LateFeeResult
from mahnung_gateway.utils.date_utils import DEFAULT_TIMEZONE, days_between, to_calendar_day
from mahnung_gateway.utils.money import ARITHMETIC_PRECISION, MAX_AMOUNT, round2, to_decimal, to_positive_decimal

logger = logging.getLogger(__name__)

# Percentage points above the Basiszinssatz (§ 288 BGB)
STATUTORY_SURCHARGES: Dict[ClientClassification, Decimal] = {
    ClientClassification.COMPANY: Decimal("0.09"),
    ClientClassification.PRIVATE: Decimal("0.05"),
}

DEFAULT_FLAT_FEE = Decimal("40.00")
DEFAULT_DAY_COUNT_BASIS = 365


def parse_classification(value: Any) -> ClientClassification:
    """Accept the enum itself or its wire value ("company" / "private")"""
    if isinstance(value, ClientClassification):
        return value
    try:
        return ClientClassification(value)
    except ValueError:
        raise InvalidInputError(f"Unknown client classification: {value!r}") from None


def compute_late_fee(
    total_amount: Any,
    due_date: Any,
    today: Any,
    client_classification: Any,
    base_statutory_rate: Any,
    flat_fee: Any = DEFAULT_FLAT_FEE,
    day_count_basis: int = DEFAULT_DAY_COUNT_BASIS,
    timezone: str = DEFAULT_TIMEZONE,
) -> LateFeeResult:
    """
    Calculate Verzugszinsen and Verzugspauschale for an overdue invoice.

    Rules:
    - Days overdue counted at day granularity, never negative
    - No accrual on or before the due date (day 0 = nothing owed)
    - Company debtors: base rate + 9 pp and a fixed flat fee
    - Private debtors: base rate + 5 pp, no flat fee
    - Simple interest on a fixed 365-day year, rounded to cents once at the end

    Example:
        1000.00, 10 days, company, base 3.62%
        → rate 12.62%, interest round2(1000 * 0.1262 * 10 / 365) = 3.46
        → 3.46 + 40.00 flat fee, new total 1043.46

    Raises:
        InvalidInputError: non-positive or oversized amount, unreadable date, implausible
            rate or unknown classification
    """
    amount = to_positive_decimal(total_amount, "total_amount")
    due = to_calendar_day(due_date, "due_date", timezone)
    reference_day = to_calendar_day(today, "today", timezone)
    classification = parse_classification(client_classification)
    base_rate = to_decimal(base_statutory_rate, "base_statutory_rate")
    if abs(base_rate) >= 1:
        raise InvalidInputError(f"base_statutory_rate must be a fraction such as 0.0362, got {base_rate}")
    fee = to_decimal(flat_fee, "flat_fee")
    if fee < 0 or fee > MAX_AMOUNT:
        raise InvalidInputError(f"flat_fee must be between 0 and {MAX_AMOUNT}, got {fee}")
    if day_count_basis <= 0:
        raise InvalidInputError(f"day_count_basis must be positive, got {day_count_basis}")

    days_overdue = max(0, days_between(due, reference_day))
    annual_rate = base_rate + STATUTORY_SURCHARGES[classification]

    if days_overdue == 0:
        return LateFeeResult(
            days_overdue=0,
            base_interest_rate=base_rate,
            annual_interest_rate=annual_rate,
            interest_amount=Decimal("0.00"),
            flat_fee=Decimal("0.00"),
            new_total=amount,
        )

    applied_flat_fee = round2(fee) if classification is ClientClassification.COMPANY else Decimal("0.00")

    # Multiply before dividing so the only rounding is the final round2
    with localcontext() as ctx:
        ctx.prec = ARITHMETIC_PRECISION
        interest = round2(amount * annual_rate * days_overdue / Decimal(day_count_basis))
        new_total = amount + interest + applied_flat_fee

    logger.debug(
        "Late fee computed",
        extra={
            "client_type": classification.value,
            "days_overdue": days_overdue,
            "annual_interest_rate": str(annual_rate),
            "interest_amount": str(interest),
        },
    )

    return LateFeeResult(
        days_overdue=days_overdue,
        base_interest_rate=base_rate,
        annual_interest_rate=annual_rate,
        interest_amount=interest,
        flat_fee=applied_flat_fee,
        new_total=new_total,
    )
