"""Unit tests for the notice assessment workflow"""

import pytest
from datetime import date, timedelta
from decimal import Decimal

from mahnung_gateway.domain.assessment import assess_invoice, build_snapshot, ensure_invoice_mature
from mahnung_gateway.domain.models import ClientClassification, InvoiceSnapshot, RvgTableRow
from mahnung_gateway.domain.exceptions import InvalidInputError, InvoiceTooRecentError


def test_ensure_invoice_mature_boundary(today):
    """Exactly 30 days old is allowed, 29 is not"""
    ensure_invoice_mature(today - timedelta(days=30), today)

    with pytest.raises(InvoiceTooRecentError) as exc_info:
        ensure_invoice_mature(today - timedelta(days=29), today)

    error = exc_info.value
    assert error.invoice_date == today - timedelta(days=29)
    assert error.minimum_age_days == 30
    assert error.earliest_notice_date == today + timedelta(days=1)


def test_too_recent_message_names_date_and_threshold():
    with pytest.raises(InvoiceTooRecentError) as exc_info:
        ensure_invoice_mature(date(2024, 6, 15), date(2024, 6, 30))

    message = str(exc_info.value)
    assert "15.06.2024" in message
    assert "30 days" in message


def test_future_invoice_date_is_too_recent(today):
    with pytest.raises(InvoiceTooRecentError):
        ensure_invoice_mature(today + timedelta(days=3), today)


def test_gate_uses_invoice_date_not_due_date(settings, today):
    """A long-overdue due date does not help a fresh invoice"""
    invoice = InvoiceSnapshot(
        total_amount=Decimal("100"),
        invoice_date=today - timedelta(days=5),
        due_date=today - timedelta(days=60),
    )

    with pytest.raises(InvoiceTooRecentError):
        assess_invoice(invoice, ClientClassification.COMPANY, today=today, settings=settings)


def test_unparseable_invoice_date_is_invalid_input(today):
    with pytest.raises(InvalidInputError):
        ensure_invoice_mature("32.01.2024", today)


def test_assess_company_invoice(settings, today, overdue_invoice, rvg_table):
    """Late fee on the invoice, RVG estimate on the new total"""
    assessment = assess_invoice(
        overdue_invoice, ClientClassification.COMPANY, today=today, settings=settings, table=rvg_table
    )

    assert assessment.late_fee.days_overdue == 10
    assert assessment.late_fee.interest_amount == Decimal("3.46")
    assert assessment.late_fee.new_total == Decimal("1043.46")
    assert assessment.fee_multiplier == Decimal("1.3")
    assert assessment.rvg_fee.fee == Decimal("289.90")
    assert assessment.rvg_fee.total == Decimal("368.78")
    assert assessment.assessed_on == today
    assert assessment.client_classification is ClientClassification.COMPANY


def test_assess_private_invoice(settings, today, overdue_invoice, rvg_table):
    assessment = assess_invoice(overdue_invoice, "private", today=today, settings=settings, table=rvg_table)

    assert assessment.late_fee.new_total == Decimal("1002.36")
    assert assessment.late_fee.flat_fee == 0
    assert assessment.rvg_fee.fee1_0 == Decimal("223.00")


def test_assess_uses_configured_base_rate(settings, today, overdue_invoice):
    """A new Basiszinssatz only needs a settings change"""
    updated = settings.model_copy(update={"base_interest_rate": Decimal("0.0127")})
    assessment = assess_invoice(overdue_invoice, ClientClassification.PRIVATE, today=today, settings=updated)

    assert assessment.late_fee.annual_interest_rate == Decimal("0.0627")
    assert assessment.late_fee.interest_amount == Decimal("1.72")  # 627 / 365 = 1.7178...


def test_assess_uses_given_table(settings, today, overdue_invoice):
    table = [RvgTableRow(upper_bound=Decimal("2000"), fee10=Decimal("100.00"))]
    assessment = assess_invoice(overdue_invoice, "company", today=today, settings=settings, table=table)

    assert assessment.rvg_fee.fee1_0 == Decimal("100.00")
    assert assessment.rvg_fee.fee == Decimal("130.00")
    assert assessment.rvg_fee.auslagen == Decimal("20.00")


def test_assess_not_yet_due_invoice(settings, today, rvg_table):
    """Old enough to remind, but the due date has not passed: nothing accrues"""
    invoice = InvoiceSnapshot(
        total_amount=Decimal("480.00"),
        invoice_date=today - timedelta(days=40),
        due_date=today,
    )
    assessment = assess_invoice(invoice, "company", today=today, settings=settings, table=rvg_table)

    assert assessment.late_fee.days_overdue == 0
    assert assessment.late_fee.new_total == Decimal("480.00")
    assert assessment.rvg_fee.fee1_0 == Decimal("51.50")


def test_build_snapshot_parses_extracted_strings():
    snapshot = build_snapshot("1250.00", "01.05.2024", "2024-05-31")

    assert snapshot.total_amount == Decimal("1250.00")
    assert snapshot.invoice_date == date(2024, 5, 1)
    assert snapshot.due_date == date(2024, 5, 31)


def test_build_snapshot_rejects_negative_total():
    with pytest.raises(InvalidInputError):
        build_snapshot("-5", "2024-05-01", "2024-05-31")
