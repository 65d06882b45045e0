"""POST /v1/assessment - full fee assessment for an uploaded invoice"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from mahnung_gateway.api.v1.schemas import AssessmentRequest, AssessmentResponse, LateFeeResponse, RvgFeeResponse
from mahnung_gateway.api.dependencies import get_fee_table, get_request_id, get_settings
from mahnung_gateway.config import Settings
from mahnung_gateway.domain.assessment import assess_invoice, build_snapshot
from mahnung_gateway.domain.exceptions import ConfigurationError, InvalidInputError, InvoiceTooRecentError
from mahnung_gateway.domain.fee_table import FeeTable
from mahnung_gateway.infrastructure.observability.metrics import record_late_fee, record_rejection, record_rvg_estimate
from mahnung_gateway.infrastructure.observability.logging import log_assessment
from mahnung_gateway.utils.date_utils import today_in

router = APIRouter()


@router.post("/assessment", response_model=AssessmentResponse)
def create_assessment(
    request_body: AssessmentRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
    table: FeeTable = Depends(get_fee_table),
):
    """
    Assess an extracted invoice for a Mahnung.

    Flow:
    1. Refuse invoices issued less than the minimum age ago
    2. Compute Verzugszinsen and Verzugspauschale
    3. Estimate RVG fees on the new total (advisory)
    4. Record metrics and log the outcome
    """
    start_time = time.time()
    request_id = get_request_id(request)
    today = request_body.today or today_in(settings.reference_timezone)

    try:
        invoice = build_snapshot(
            request_body.invoice.total_amount,
            request_body.invoice.invoice_date,
            request_body.invoice.due_date,
            settings.reference_timezone,
        )
        assessment = assess_invoice(invoice, request_body.client_type, today=today, settings=settings, table=table)

    except InvoiceTooRecentError as e:
        record_rejection("too_recent")
        logging.info(f"Invoice too recent: {e}", extra={"request_id": request_id})
        raise HTTPException(
            status_code=422,
            detail={
                "code": "invoice_too_recent",
                "message": str(e),
                "invoice_date": e.invoice_date.isoformat(),
                "minimum_age_days": e.minimum_age_days,
                "earliest_notice_date": e.earliest_notice_date.isoformat(),
            },
        )

    except InvalidInputError as e:
        record_rejection("invalid_input")
        logging.warning(f"Invalid invoice data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except ConfigurationError as e:
        logging.error(f"Fee configuration error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Fee configuration invalid")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_late_fee(assessment.client_classification.value, assessment.late_fee)
    record_rvg_estimate(assessment.rvg_fee)
    log_assessment(
        request_id,
        assessment.client_classification.value,
        assessment.late_fee.days_overdue,
        str(assessment.late_fee.new_total),
        str(assessment.rvg_fee.total),
        duration_ms,
    )

    return AssessmentResponse(
        client_type=assessment.client_classification,
        assessed_on=assessment.assessed_on,
        fee_multiplier=assessment.fee_multiplier,
        late_fee=LateFeeResponse.from_result(assessment.late_fee),
        rvg_fee=RvgFeeResponse.from_result(assessment.rvg_fee),
    )
