"""RVG estimator - advisory lawyer fee for a given Gegenstandswert"""

import logging
from decimal import Decimal, ROUND_CEILING, localcontext
from typing import Any, Iterable, Optional, Sequence

from mahnung_gateway.domain.exceptions import ConfigurationError, InvalidInputError
from mahnung_gateway.domain.fee_table import load_fee_table
from mahnung_gateway.domain.models import RvgFeeResult, RvgOptions, RvgTableRow
from mahnung_gateway.utils.money import ARITHMETIC_PRECISION, round2, to_positive_decimal

logger = logging.getLogger(__name__)


def lookup_base_fee(
    claim_value: Decimal,
    table: Sequence[RvgTableRow],
    increment_per_50k: Decimal,
    bracket_width: Decimal,
) -> tuple[Decimal, int]:
    """
    Find the 1.0 base fee for a claim value.

    The bracket whose upper bound is the first >= claim_value applies. Beyond
    the last bracket the schedule is extrapolated: every started
    bracket_width adds increment_per_50k.

    Returns: (fee1_0, extra_units)
    """
    rows = sorted(table, key=lambda r: r.upper_bound)

    for row in rows:
        if claim_value <= row.upper_bound:
            return row.fee10, 0

    max_row = rows[-1]
    extra_units = int(((claim_value - max_row.upper_bound) / bracket_width).to_integral_value(rounding=ROUND_CEILING))
    return max_row.fee10 + extra_units * increment_per_50k, extra_units


def compute_rvg_fee(
    claim_value: Any,
    fee_multiplier: Any,
    table: Iterable[Any],
    options: Optional[RvgOptions] = None,
) -> RvgFeeResult:
    """
    Estimate statutory lawyer fees (RVG) for a claim.

    Steps, each rounded to cents on its own:
    1. fee = base fee x Gebührensatz
    2. Auslagenpauschale = 20% of fee, capped at 20.00
    3. subtotal = fee + Auslagenpauschale
    4. VAT 19% of subtotal unless disabled or Kleinunternehmer
    5. total = subtotal + VAT

    Example:
        1043.46 at 1.3 → bracket 5000 (223.00) → fee 289.90, Auslagen 20.00,
        subtotal 309.90, VAT 58.88, total 368.78

    Raises:
        InvalidInputError: non-positive or oversized claim value or multiplier,
            empty or malformed table
    """
    opts = options or RvgOptions()
    value = to_positive_decimal(claim_value, "claim_value")
    multiplier = to_positive_decimal(fee_multiplier, "fee_multiplier")
    try:
        rows = load_fee_table(table)
    except ConfigurationError as e:
        raise InvalidInputError(f"Unusable RVG table: {e}") from e

    with localcontext() as ctx:
        ctx.prec = ARITHMETIC_PRECISION
        fee1_0, extra_units = lookup_base_fee(value, rows, opts.increment_per_50k, opts.bracket_width)

        fee = round2(fee1_0 * multiplier)
        auslagen = min(round2(opts.auslagen_rate * fee), opts.auslagen_cap) if opts.with_auslagen_pauschale else Decimal("0.00")
        subtotal = round2(fee + auslagen)
        vat = round2(subtotal * opts.vat_rate) if opts.with_vat and not opts.is_kleinunternehmer else Decimal("0.00")
        total = round2(subtotal + vat)

    logger.debug(
        "RVG fee estimated",
        extra={
            "claim_value": str(value),
            "fee_multiplier": str(multiplier),
            "extra_units": extra_units,
            "total": str(total),
        },
    )

    return RvgFeeResult(
        fee1_0=fee1_0,
        fee=fee,
        auslagen=auslagen,
        subtotal=subtotal,
        vat=vat,
        total=total,
        extra_units=extra_units,
    )
