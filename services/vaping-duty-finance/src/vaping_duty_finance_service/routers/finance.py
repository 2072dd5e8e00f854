"""Financial data endpoints, available to enrolled organisations only."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from vaping_duty_finance_service.core.state import get_app_state
from vaping_duty_finance_service.schemas import FinancialDataResponse

router = APIRouter()


async def _financial_data(request: Request) -> JSONResponse:
    """Render the authorised caller's identifiers."""
    body = FinancialDataResponse(
        internal_id=request.state.internal_id,
        vppa_id=request.state.enrolment_identifier,
    )
    return JSONResponse(status_code=200, content=body.model_dump())


@router.get("/financial-data")
async def get_financial_data(request: Request) -> Response:
    """Return financial data for the authorised caller."""
    state = get_app_state()
    if state.authorised_action is None:
        msg = "Authorised action not initialized"
        raise RuntimeError(msg)

    return await state.authorised_action.invoke_block(request, _financial_data)
