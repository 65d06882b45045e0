"""POST /v1/late-fee - Verzugszinsen and Verzugspauschale for an overdue invoice"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from mahnung_gateway.api.v1.schemas import LateFeeRequest, LateFeeResponse
from mahnung_gateway.api.dependencies import get_request_id, get_settings
from mahnung_gateway.config import Settings
from mahnung_gateway.domain.late_fee import compute_late_fee
from mahnung_gateway.domain.exceptions import InvalidInputError
from mahnung_gateway.infrastructure.observability.metrics import record_late_fee, record_rejection
from mahnung_gateway.utils.date_utils import today_in

router = APIRouter()


@router.post("/late-fee", response_model=LateFeeResponse)
def calculate_late_fee(
    request_body: LateFeeRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Compute days overdue, statutory interest and flat fee.

    The Basiszinssatz defaults to the configured value; callers may pass
    another one to reproduce a computation from an earlier half-year.
    """
    request_id = get_request_id(request)
    today = request_body.today or today_in(settings.reference_timezone)
    base_rate = (
        request_body.base_interest_rate
        if request_body.base_interest_rate is not None
        else settings.base_interest_rate
    )

    try:
        result = compute_late_fee(
            request_body.total_amount,
            request_body.due_date,
            today,
            request_body.client_type,
            base_rate,
            flat_fee=settings.company_flat_fee,
            day_count_basis=settings.day_count_basis,
            timezone=settings.reference_timezone,
        )
    except InvalidInputError as e:
        record_rejection("invalid_input")
        logging.warning(f"Invalid late fee input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_late_fee(request_body.client_type.value, result)
    return LateFeeResponse.from_result(result)
