from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import PlainTextResponse

from ledger_import.api.state import get_session_state
from ledger_import.common.logging_config import get_logger
from ledger_import.core.errors import AccountNotFoundError, ImportRecordNotFoundError
from ledger_import.exporting.ofx import OFXWriter
from ledger_import.parsing.exceptions import StatementParseError, UnsupportedFormatError
from ledger_import.parsing.registry import get_supported_banks

logger = get_logger(__name__)
router = APIRouter()

# Tried in order; cp1251 covers Russian bank exports
ENCODINGS = ('utf-8-sig', 'cp1251')


def read_upload(file: UploadFile) -> str:
    raw = file.file.read()
    for encoding in ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw.decode('utf-8', errors='replace')


def _parse_or_400(state, content: str, file_name: str):
    try:
        result = state.importer.preview_import(content, file_name)
    except StatementParseError as e:
        logger.warning(f"Statement parse error: {e}", file_name=file_name)
        raise HTTPException(status_code=400, detail=f"Parse error: {e}")
    if result is None:
        raise HTTPException(status_code=400, detail="Unsupported file format")
    return result


@router.get("/banks")
def list_banks():
    return {"banks": get_supported_banks()}


@router.post("/preview")
def preview_statement(request: Request, file: UploadFile = File(...)):
    state = get_session_state(request)
    content = read_upload(file)
    result = _parse_or_400(state, content, file.filename)

    suggested = state.importer.suggest_account(result)
    logger.info(f"Statement previewed: {file.filename}", bank_code=result.bank_code, tx_count=len(result.transactions))
    return {
        "parse_result": result.to_dict(),
        "suggested_account_id": suggested.id if suggested else None,
    }


@router.post("/")
def import_statement(
    request: Request,
    file: UploadFile = File(...),
    account_id: str = Form(...),
    skip_duplicates: bool = Form(True),
):
    state = get_session_state(request)
    content = read_upload(file)

    try:
        result = state.importer.import_statement(content, file.filename, account_id, skip_duplicates)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StatementParseError as e:
        logger.warning(f"Statement parse error: {e}", file_name=file.filename)
        raise HTTPException(status_code=400, detail=f"Parse error: {e}")

    return result.to_dict()


@router.post("/export-ofx", response_class=PlainTextResponse)
def export_ofx(request: Request, file: UploadFile = File(...)):
    state = get_session_state(request)
    content = read_upload(file)
    result = _parse_or_400(state, content, file.filename)
    return PlainTextResponse(OFXWriter().generate(result), media_type="application/x-ofx")


@router.get("/history")
def list_history(request: Request, account_id: Optional[str] = None):
    state = get_session_state(request)
    return {"imports": [r.to_dict() for r in state.history.list(account_id)]}


@router.delete("/history/{import_id}")
def remove_history_entry(request: Request, import_id: str):
    state = get_session_state(request)
    if not state.history.remove(import_id):
        raise HTTPException(status_code=404, detail=f"Import record not found: {import_id}")
    return {"message": "Import record removed"}


@router.post("/history/{import_id}/undo")
def undo_import(request: Request, import_id: str):
    state = get_session_state(request)
    try:
        deleted = state.importer.undo_import(import_id)
    except ImportRecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"deleted": deleted}
