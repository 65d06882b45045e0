"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from mahnung_gateway.domain.exceptions import ConfigurationError, InvalidInputError
from mahnung_gateway.utils.money import to_decimal


class ClientClassification(str, Enum):
    """Debtor type; drives the statutory surcharge and the flat fee"""

    COMPANY = "company"
    PRIVATE = "private"


@dataclass(frozen=True)
class InvoiceSnapshot:
    """Invoice fields extracted from the uploaded PDF"""

    total_amount: Decimal
    invoice_date: date
    due_date: date


@dataclass(frozen=True)
class LateFeeResult:
    """Verzugszinsen and Verzugspauschale for one overdue invoice"""

    days_overdue: int
    base_interest_rate: Decimal
    annual_interest_rate: Decimal
    interest_amount: Decimal
    flat_fee: Decimal
    new_total: Decimal

    @property
    def total_late_fee(self) -> Decimal:
        return self.interest_amount + self.flat_fee


@dataclass(frozen=True)
class RvgTableRow:
    """One bracket of the RVG fee schedule: claim values up to upper_bound cost fee10 at 1.0"""

    upper_bound: Decimal
    fee10: Decimal

    def __post_init__(self):
        for name in ("upper_bound", "fee10"):
            try:
                object.__setattr__(self, name, to_decimal(getattr(self, name), name))
            except InvalidInputError as e:
                raise ConfigurationError(f"Malformed RVG table row: {e}") from e

        if self.upper_bound <= 0:
            raise ConfigurationError(f"RVG table upper bound must be positive, got {self.upper_bound}")
        if self.fee10 < 0:
            raise ConfigurationError(f"RVG base fee must not be negative, got {self.fee10}")


_OPTION_AMOUNTS = ("increment_per_50k", "bracket_width", "vat_rate", "auslagen_rate", "auslagen_cap")


@dataclass(frozen=True)
class RvgOptions:
    """Switches and statutory constants for an RVG estimate"""

    with_auslagen_pauschale: bool = True
    with_vat: bool = True
    is_kleinunternehmer: bool = False
    increment_per_50k: Decimal = Decimal("175")
    bracket_width: Decimal = Decimal("50000")
    vat_rate: Decimal = Decimal("0.19")
    auslagen_rate: Decimal = Decimal("0.20")
    auslagen_cap: Decimal = Decimal("20.00")

    def __post_init__(self):
        for name in _OPTION_AMOUNTS:
            object.__setattr__(self, name, to_decimal(getattr(self, name), name))

        if self.bracket_width <= 0:
            raise InvalidInputError(f"bracket_width must be positive, got {self.bracket_width}")
        if self.increment_per_50k < 0 or self.auslagen_cap < 0:
            raise InvalidInputError("increment_per_50k and auslagen_cap must not be negative")
        for name in ("vat_rate", "auslagen_rate"):
            if not 0 <= getattr(self, name) < 1:
                raise InvalidInputError(f"{name} must be a fraction between 0 and 1, got {getattr(self, name)}")


@dataclass(frozen=True)
class RvgFeeResult:
    """Itemized lawyer fee estimate"""

    fee1_0: Decimal
    fee: Decimal
    auslagen: Decimal
    subtotal: Decimal
    vat: Decimal
    total: Decimal
    extra_units: int


@dataclass(frozen=True)
class NoticeAssessment:
    """Everything the notice screen needs: late fee plus advisory lawyer fee"""

    invoice: InvoiceSnapshot
    client_classification: ClientClassification
    late_fee: LateFeeResult
    rvg_fee: RvgFeeResult
    fee_multiplier: Decimal
    assessed_on: date
