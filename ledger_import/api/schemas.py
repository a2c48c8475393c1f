from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AccountIn(BaseModel):
    id: str
    user: Optional[int] = None
    title: str = ''
    instrument: Optional[int] = None
    type: str = 'checking'
    archive: bool = False
    swift_code: Optional[str] = None
    bank_account_number: Optional[str] = None
    sync_id: Optional[List[str]] = None


class FilterRequest(BaseModel):
    conditions: Dict[str, Any] = Field(default_factory=dict)
