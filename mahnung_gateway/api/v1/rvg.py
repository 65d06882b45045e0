"""RVG endpoints - lawyer fee estimate and the active fee table"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from mahnung_gateway.api.v1.schemas import RvgFeeRequest, RvgFeeResponse, RvgTableResponse, RvgTableRowSchema
from mahnung_gateway.api.dependencies import get_fee_table, get_request_id, get_settings
from mahnung_gateway.config import Settings
from mahnung_gateway.domain.fee_table import FeeTable
from mahnung_gateway.domain.rvg import compute_rvg_fee
from mahnung_gateway.domain.exceptions import InvalidInputError
from mahnung_gateway.infrastructure.observability.metrics import record_rvg_estimate

router = APIRouter()


@router.post("/rvg-fee", response_model=RvgFeeResponse)
def estimate_rvg_fee(
    request_body: RvgFeeRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
    table: FeeTable = Depends(get_fee_table),
):
    """
    Estimate lawyer fees for a Gegenstandswert.

    Returns:
        Base fee, fee at the requested Gebührensatz, Auslagenpauschale, VAT and total
    """
    options = settings.rvg_options(
        with_auslagen_pauschale=request_body.with_auslagen_pauschale,
        with_vat=request_body.with_vat,
        is_kleinunternehmer=request_body.is_kleinunternehmer,
    )

    try:
        result = compute_rvg_fee(request_body.claim_value, request_body.fee_multiplier, table, options)
    except InvalidInputError as e:
        logging.warning(f"Invalid RVG input: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    record_rvg_estimate(result)
    return RvgFeeResponse.from_result(result)


@router.get("/rvg-table", response_model=RvgTableResponse)
def get_rvg_table(table: FeeTable = Depends(get_fee_table)):
    """List the brackets currently used for estimates"""
    return RvgTableResponse(rows=[RvgTableRowSchema.from_row(row) for row in table])
