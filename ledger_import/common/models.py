import time
import uuid
from dataclasses import dataclass, field, fields, asdict
from typing import List, Optional

# income == outcome == DELETED_AMOUNT marks a permanently deleted transaction
DELETED_AMOUNT = 0.00001


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class ParsedTransaction:
    """
    Canonical representation of one statement line before it becomes
    a ledger transaction. Amount is positive for money in, negative for money out.
    """
    fit_id: str
    date: str  # ISO date, YYYY-MM-DD
    amount: float
    currency: str
    payee: str
    memo: str
    account_number: Optional[str] = None

    def to_dict(self):
        return asdict(self)


@dataclass
class ParseResult:
    """Normalized output of a bank converter."""
    bank_code: str
    account_number: str
    currency: str
    date_start: str
    date_end: str
    transactions: List[ParsedTransaction] = field(default_factory=list)

    def to_dict(self):
        return {
            'bank_code': self.bank_code,
            'account_number': self.account_number,
            'currency': self.currency,
            'date_start': self.date_start,
            'date_end': self.date_end,
            'transactions': [t.to_dict() for t in self.transactions],
        }


@dataclass(frozen=True)
class ImportRecord:
    """
    History entry written once per successful import.
    """
    id: str
    account_id: str
    bank_code: str
    file_name: str
    import_date: int  # epoch ms
    date_range_start: str
    date_range_end: str
    transaction_count: int
    transaction_ids: tuple = ()

    def to_dict(self):
        data = asdict(self)
        data['transaction_ids'] = list(self.transaction_ids)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ImportRecord":
        return cls(
            id=data['id'],
            account_id=data['account_id'],
            bank_code=data['bank_code'],
            file_name=data['file_name'],
            import_date=int(data['import_date']),
            date_range_start=data['date_range_start'],
            date_range_end=data['date_range_end'],
            transaction_count=int(data['transaction_count']),
            transaction_ids=tuple(data.get('transaction_ids') or ()),
        )


@dataclass
class ImportResult:
    imported: int
    skipped: int
    import_record: ImportRecord

    def to_dict(self):
        return {
            'imported': self.imported,
            'skipped': self.skipped,
            'import_record': self.import_record.to_dict(),
        }


@dataclass
class Account:
    id: str
    user: Optional[int] = None
    title: str = ''
    instrument: Optional[int] = None
    type: str = 'checking'  # 'cash', 'ccard', 'checking', 'deposit', 'loan', 'debt'
    archive: bool = False
    swift_code: Optional[str] = None
    bank_account_number: Optional[str] = None
    sync_id: Optional[List[str]] = None

    def to_dict(self):
        return asdict(self)


@dataclass
class Transaction:
    """
    Ledger transaction. For a plain income or outcome only one side carries
    a nonzero amount; a transfer carries both.
    """
    id: str
    date: str
    user: Optional[int] = None
    income: float = 0.0
    income_account: Optional[str] = None
    income_instrument: Optional[int] = None
    outcome: float = 0.0
    outcome_account: Optional[str] = None
    outcome_instrument: Optional[int] = None
    payee: Optional[str] = None
    original_payee: Optional[str] = None
    merchant: Optional[str] = None
    comment: Optional[str] = None
    tag: Optional[List[str]] = None
    hold: Optional[bool] = None
    viewed: bool = False
    deleted: bool = False
    created: int = 0
    changed: int = 0

    def to_dict(self):
        return asdict(self)

    @classmethod
    def field_names(cls) -> frozenset:
        return frozenset(f.name for f in fields(cls))


def make_transaction(**values) -> Transaction:
    """Build a new ledger transaction with a fresh id and timestamps."""
    now = now_ms()
    values.setdefault('id', str(uuid.uuid4()))
    values.setdefault('created', now)
    values.setdefault('changed', now)
    return Transaction(**values)
