"""RVG fee schedule data and the process-wide table registry"""

import threading
from decimal import Decimal
from typing import Any, Iterable, Mapping, Tuple

from mahnung_gateway.domain.exceptions import ConfigurationError
from mahnung_gateway.domain.models import RvgTableRow

FeeTable = Tuple[RvgTableRow, ...]

# Base fee at multiplier 1.0 per claim-value bracket (upper bound inclusive)
DEFAULT_RVG_ROWS = [
    (Decimal("500"), Decimal("51.50")),
    (Decimal("1000"), Decimal("93.00")),
    (Decimal("5000"), Decimal("223.00")),
    (Decimal("10000"), Decimal("652.00")),
    (Decimal("50000"), Decimal("1234.00")),
    (Decimal("100000"), Decimal("2000.00")),
    (Decimal("500000"), Decimal("3539.00")),
]


def _to_row(raw: Any) -> RvgTableRow:
    if isinstance(raw, RvgTableRow):
        return raw
    if isinstance(raw, Mapping):
        upper, fee = raw.get("upper_bound"), raw.get("fee10")
    elif isinstance(raw, (str, bytes)):
        raise ConfigurationError(f"RVG table row must be a pair or mapping, got {raw!r}")
    else:
        try:
            upper, fee = raw
        except (TypeError, ValueError):
            raise ConfigurationError(f"RVG table row must be a pair or mapping, got {raw!r}") from None

    return RvgTableRow(upper_bound=upper, fee10=fee)


def load_fee_table(rows: Iterable[Any]) -> FeeTable:
    """
    Validate and normalize an RVG table.

    Accepts RvgTableRow objects, (upper_bound, fee10) pairs or mappings with
    those keys. Returns an immutable tuple sorted ascending by upper bound.

    Raises:
        ConfigurationError: empty table, malformed row, non-positive bound or duplicate bound
    """
    try:
        raw_rows = list(rows)
    except TypeError:
        raise ConfigurationError(f"RVG table must be a list of rows, got {type(rows).__name__}") from None

    table = tuple(sorted((_to_row(raw) for raw in raw_rows), key=lambda r: r.upper_bound))
    if not table:
        raise ConfigurationError("RVG table must contain at least one row")

    bounds = [row.upper_bound for row in table]
    if len(set(bounds)) != len(bounds):
        raise ConfigurationError("RVG table contains duplicate upper bounds")

    return table


RVG_TABLE: FeeTable = load_fee_table(DEFAULT_RVG_ROWS)


class FeeTableRegistry:
    """Holds the active RVG table; swaps are atomic, reads never block"""

    def __init__(self, table: FeeTable = RVG_TABLE):
        self._table = table
        self._lock = threading.Lock()

    def get(self) -> FeeTable:
        return self._table

    def replace(self, rows: Iterable[Any]) -> FeeTable:
        """Validate the new rows fully before publishing them"""
        table = load_fee_table(rows)
        with self._lock:
            self._table = table
        return table


fee_table_registry = FeeTableRegistry()
