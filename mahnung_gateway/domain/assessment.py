"""Notice assessment - the upload workflow from invoice snapshot to fee figures"""

from datetime import date
from typing import Any, Optional, Sequence

from mahnung_gateway.config import Settings, load_settings
from mahnung_gateway.domain.exceptions import InvoiceTooRecentError
from mahnung_gateway.domain.fee_table import fee_table_registry
from mahnung_gateway.domain.late_fee import compute_late_fee, parse_classification
from mahnung_gateway.domain.models import InvoiceSnapshot, NoticeAssessment, RvgTableRow
from mahnung_gateway.domain.rvg import compute_rvg_fee
from mahnung_gateway.utils.date_utils import DEFAULT_TIMEZONE, days_between, to_calendar_day, today_in
from mahnung_gateway.utils.money import to_positive_decimal


def ensure_invoice_mature(
    invoice_date: Any,
    today: Any,
    minimum_age_days: int = 30,
    timezone: str = DEFAULT_TIMEZONE,
) -> None:
    """
    Refuse invoices issued fewer than minimum_age_days ago.

    Business gate of the upload workflow: it looks at the invoice date,
    not the due date, and is independent of the fee math.
    """
    issued = to_calendar_day(invoice_date, "invoice_date", timezone)
    reference_day = to_calendar_day(today, "today", timezone)

    if days_between(issued, reference_day) < minimum_age_days:
        raise InvoiceTooRecentError(issued, minimum_age_days)


def build_snapshot(total_amount: Any, invoice_date: Any, due_date: Any, timezone: str = DEFAULT_TIMEZONE) -> InvoiceSnapshot:
    """Validate raw extracted fields into an InvoiceSnapshot"""
    return InvoiceSnapshot(
        total_amount=to_positive_decimal(total_amount, "total_amount"),
        invoice_date=to_calendar_day(invoice_date, "invoice_date", timezone),
        due_date=to_calendar_day(due_date, "due_date", timezone),
    )


def assess_invoice(
    invoice: InvoiceSnapshot,
    client_classification: Any,
    today: Optional[date] = None,
    settings: Optional[Settings] = None,
    table: Optional[Sequence[RvgTableRow]] = None,
) -> NoticeAssessment:
    """
    Main entry point: gate the invoice, compute late fees, estimate lawyer fees.

    Flow:
    1. Reject invoices younger than the configured minimum age
    2. Verzugszinsen + Verzugspauschale on the invoice total
    3. RVG estimate at the default Gebührensatz on the new total (advisory only)

    Raises:
        InvoiceTooRecentError: invoice date is too close to today
        InvalidInputError: invoice fields or classification are unusable
    """
    cfg = settings or load_settings()
    reference_day = today if today is not None else today_in(cfg.reference_timezone)
    classification = parse_classification(client_classification)

    ensure_invoice_mature(invoice.invoice_date, reference_day, cfg.minimum_invoice_age_days, cfg.reference_timezone)

    late_fee = compute_late_fee(
        invoice.total_amount,
        invoice.due_date,
        reference_day,
        classification,
        cfg.base_interest_rate,
        flat_fee=cfg.company_flat_fee,
        day_count_basis=cfg.day_count_basis,
        timezone=cfg.reference_timezone,
    )

    rvg_fee = compute_rvg_fee(
        late_fee.new_total,
        cfg.default_fee_multiplier,
        table if table is not None else fee_table_registry.get(),
        cfg.rvg_options(with_auslagen_pauschale=True, with_vat=True),
    )

    return NoticeAssessment(
        invoice=invoice,
        client_classification=classification,
        late_fee=late_fee,
        rvg_fee=rvg_fee,
        fee_multiplier=cfg.default_fee_multiplier,
        assessed_on=to_calendar_day(reference_day, "today", cfg.reference_timezone),
    )
