"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from mahnung_gateway.domain.models import ClientClassification, LateFeeResult, RvgFeeResult, RvgTableRow
from mahnung_gateway.utils.money import MAX_AMOUNT


class LateFeeRequest(BaseModel):
    """Request body for POST /v1/late-fee"""

    total_amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT, description="Invoice total (Rechnungsbetrag)")
    due_date: date = Field(..., description="Fälligkeitsdatum")
    client_type: ClientClassification
    today: Optional[date] = Field(None, description="Reference day, defaults to today")
    base_interest_rate: Optional[Decimal] = Field(None, gt=-1, lt=1, description="Basiszinssatz override, e.g. 0.0362")


class LateFeeResponse(BaseModel):
    """Computed Verzugszinsen and Verzugspauschale"""

    days_overdue: int
    base_interest_rate: Decimal
    annual_interest_rate: Decimal
    interest_amount: Decimal
    flat_fee: Decimal
    total_late_fee: Decimal
    new_total: Decimal

    @classmethod
    def from_result(cls, result: LateFeeResult) -> "LateFeeResponse":
        return cls(
            days_overdue=result.days_overdue,
            base_interest_rate=result.base_interest_rate,
            annual_interest_rate=result.annual_interest_rate,
            interest_amount=result.interest_amount,
            flat_fee=result.flat_fee,
            total_late_fee=result.total_late_fee,
            new_total=result.new_total,
        )


class RvgFeeRequest(BaseModel):
    """Request body for POST /v1/rvg-fee"""

    claim_value: Decimal = Field(..., gt=0, le=MAX_AMOUNT, description="Gegenstandswert")
    fee_multiplier: Decimal = Field(Decimal("1.3"), gt=0, le=MAX_AMOUNT, description="Gebührensatz")
    with_auslagen_pauschale: bool = True
    with_vat: bool = True
    is_kleinunternehmer: bool = False


class RvgFeeResponse(BaseModel):
    """Itemized lawyer fee estimate"""

    fee1_0: Decimal
    fee: Decimal
    auslagen: Decimal
    subtotal: Decimal
    vat: Decimal
    total: Decimal
    extra_units: int

    @classmethod
    def from_result(cls, result: RvgFeeResult) -> "RvgFeeResponse":
        return cls(
            fee1_0=result.fee1_0,
            fee=result.fee,
            auslagen=result.auslagen,
            subtotal=result.subtotal,
            vat=result.vat,
            total=result.total,
            extra_units=result.extra_units,
        )


class InvoiceSchema(BaseModel):
    """Invoice fields as extracted from the PDF"""

    total_amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT)
    invoice_date: date
    due_date: date


class AssessmentRequest(BaseModel):
    """Request body for POST /v1/assessment"""

    invoice: InvoiceSchema
    client_type: ClientClassification
    today: Optional[date] = None


class AssessmentResponse(BaseModel):
    """Response for POST /v1/assessment"""

    client_type: ClientClassification
    assessed_on: date
    fee_multiplier: Decimal
    late_fee: LateFeeResponse
    rvg_fee: RvgFeeResponse


class RvgTableRowSchema(BaseModel):
    """Single bracket of the RVG table"""

    upper_bound: Decimal
    fee10: Decimal

    @classmethod
    def from_row(cls, row: RvgTableRow) -> "RvgTableRowSchema":
        return cls(upper_bound=row.upper_bound, fee10=row.fee10)


class RvgTableResponse(BaseModel):
    """Response for GET /v1/rvg-table"""

    rows: List[RvgTableRowSchema]
