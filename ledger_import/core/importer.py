"""
Statement import orchestration.

Parses a statement, drops lines already present in the ledger, posts the
rest as same-account transactions in one batch and records the import in
the history.
"""
import uuid
from typing import Optional

from ledger_import.common.logging_config import get_logger
from ledger_import.common.models import (
    Account,
    ImportRecord,
    ImportResult,
    ParsedTransaction,
    ParseResult,
    Transaction,
    make_transaction,
    now_ms,
)
from ledger_import.parsing.exceptions import UnsupportedFormatError
from ledger_import.parsing.registry import ConverterRegistry, default_registry
from .duplicates import is_duplicate
from .errors import AccountNotFoundError, ImportRecordNotFoundError
from .history import ImportHistory
from .ledger import AccountDirectory, TransactionStore
from . import matcher

logger = get_logger(__name__)

COMMENT_MAX_LENGTH = 255


def build_comment(parsed: ParsedTransaction) -> str:
    return f"[Import: {parsed.fit_id}] {parsed.memo}"[:COMMENT_MAX_LENGTH]


def build_transaction(parsed: ParsedTransaction, account: Account) -> Transaction:
    """
    Ledger transaction for one statement line. Both sides point at the
    target account; only the side matching the sign carries the amount.
    """
    is_income = parsed.amount > 0
    amount = abs(parsed.amount)

    return make_transaction(
        user=account.user,
        date=parsed.date,
        income_instrument=account.instrument,
        outcome_instrument=account.instrument,
        income_account=account.id,
        outcome_account=account.id,
        income=amount if is_income else 0.0,
        outcome=0.0 if is_income else amount,
        payee=parsed.payee or None,
        original_payee=parsed.payee or None,
        comment=build_comment(parsed),
    )


class StatementImporter:
    """
    Imports bank statements into a ledger.

    Args:
        ledger: store with ``apply_batch`` and ``get_transactions_by_id``
        accounts: directory with ``get`` and ``get_accounts``
        history: import history store
        registry: converter registry (defaults to all known banks)
    """

    def __init__(
        self,
        ledger: TransactionStore,
        accounts: AccountDirectory,
        history: ImportHistory,
        registry: Optional[ConverterRegistry] = None,
    ):
        self.ledger = ledger
        self.accounts = accounts
        self.history = history
        self.registry = registry or default_registry

    def preview_import(self, file_content: str, file_name: str) -> Optional[ParseResult]:
        """Parse without touching the ledger or history."""
        return self.registry.parse(file_content, file_name)

    def suggest_account(self, parse_result: ParseResult) -> Optional[Account]:
        return matcher.suggest_account(self.accounts.get_accounts(), parse_result)

    def import_statement(
        self,
        file_content: str,
        file_name: str,
        account_id: str,
        skip_duplicates: bool = True,
    ) -> ImportResult:
        """
        Import a statement file into ``account_id``.

        Raises:
            AccountNotFoundError: target account does not exist
            UnsupportedFormatError: no converter recognised the file
            StatementParseError: the converter failed on the content
        """
        account = self.accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        parse_result = self.registry.parse(file_content, file_name)
        if parse_result is None:
            raise UnsupportedFormatError(file_name)

        existing = self.ledger.get_transactions_by_id()

        transactions = []
        skipped = 0
        for parsed in parse_result.transactions:
            if skip_duplicates and is_duplicate(parsed, existing, account_id):
                skipped += 1
                continue
            transactions.append(build_transaction(parsed, account))

        if transactions:
            self.ledger.apply_batch(transactions)

        record = ImportRecord(
            id=str(uuid.uuid4()),
            account_id=account_id,
            bank_code=parse_result.bank_code,
            file_name=file_name,
            import_date=now_ms(),
            date_range_start=parse_result.date_start,
            date_range_end=parse_result.date_end,
            transaction_count=len(transactions),
            transaction_ids=tuple(t.id for t in transactions),
        )
        self.history.add(record)

        logger.info(
            f"Statement imported ({parse_result.bank_code}, {len(transactions)} txns)",
            bank_code=parse_result.bank_code,
            account_id=account_id,
            imported=len(transactions),
            skipped=skipped,
            file_name=file_name,
        )
        return ImportResult(imported=len(transactions), skipped=skipped, import_record=record)

    def undo_import(self, import_id: str) -> int:
        """
        Soft-deletes the transactions created by an import and drops its
        history record. Returns the number of transactions deleted.
        """
        record = self.history.get(import_id)
        if record is None:
            raise ImportRecordNotFoundError(import_id)

        present = [i for i in record.transaction_ids if self.ledger.get(i) is not None]
        if present:
            self.ledger.delete_transactions(present)
        self.history.remove(import_id)

        logger.info("Import undone", import_id=import_id, deleted=len(present))
        return len(present)
