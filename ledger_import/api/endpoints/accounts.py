from fastapi import APIRouter, Request

from ledger_import.api.schemas import AccountIn
from ledger_import.api.state import get_session_state
from ledger_import.common.models import Account

router = APIRouter()


@router.post("/")
def register_account(request: Request, account: AccountIn):
    state = get_session_state(request)
    state.accounts.add(Account(**account.model_dump()))
    return {"message": "Account registered", "id": account.id}


@router.get("/")
def list_accounts(request: Request):
    state = get_session_state(request)
    return {"accounts": [a.to_dict() for a in state.accounts.get_accounts().values()]}
