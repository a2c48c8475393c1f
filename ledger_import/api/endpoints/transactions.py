from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse

from ledger_import.api.schemas import FilterRequest
from ledger_import.api.state import get_session_state
from ledger_import.common.logging_config import get_logger
from ledger_import.exporting.tabular import frame_to_csv, transactions_to_frame
from ledger_import.filtering import UnknownFilterFieldError, filter_transactions

logger = get_logger(__name__)
router = APIRouter()


def _filtered(request: Request, req: FilterRequest):
    state = get_session_state(request)
    try:
        return filter_transactions(state.ledger.list(), req.conditions, state.accounts.debt_account_ids())
    except (UnknownFilterFieldError, ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Invalid filter: {e}", conditions=req.conditions)
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/filter")
def filter_ledger(request: Request, req: FilterRequest):
    matched = _filtered(request, req)
    return {"count": len(matched), "transactions": [tr.to_dict() for tr in matched]}


@router.post("/export", response_class=PlainTextResponse)
def export_ledger(request: Request, req: FilterRequest):
    matched = _filtered(request, req)
    return PlainTextResponse(frame_to_csv(transactions_to_frame(matched)), media_type="text/csv")
