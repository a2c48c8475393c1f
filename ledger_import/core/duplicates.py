"""
Duplicate detection for parsed statement lines.

A heuristic: same day, same account, same amount (within a cent) and a
matching payee or the bank id quoted in the comment. False positives and
negatives are possible.
"""
from typing import Iterable, Mapping, Union

from ledger_import.common.logging_config import get_logger
from ledger_import.common.models import ParsedTransaction, Transaction
from ledger_import.filtering.helpers import is_deleted

logger = get_logger(__name__)

DUPLICATE_AMOUNT_TOLERANCE = 0.01

ExistingTransactions = Union[Mapping[str, Transaction], Iterable[Transaction]]


def _iter_transactions(existing: ExistingTransactions) -> Iterable[Transaction]:
    if isinstance(existing, Mapping):
        return existing.values()
    return existing


def matches_existing(parsed: ParsedTransaction, tr: Transaction, account_id: str) -> bool:
    """True if ``tr`` looks like an earlier import of ``parsed``."""
    if is_deleted(tr):
        return False
    if tr.date != parsed.date:
        return False
    if tr.income_account != account_id and tr.outcome_account != account_id:
        return False

    parsed_amount = abs(parsed.amount)
    tr_amount = tr.income if parsed.amount > 0 else tr.outcome
    if abs(abs(tr_amount or 0.0) - parsed_amount) > DUPLICATE_AMOUNT_TOLERANCE:
        return False

    return (
        tr.payee == parsed.payee
        or tr.original_payee == parsed.payee
        or (tr.comment is not None and parsed.fit_id in tr.comment)
    )


def is_duplicate(parsed: ParsedTransaction, existing_transactions: ExistingTransactions, account_id: str) -> bool:
    """
    Check if a parsed transaction already exists in the ledger for the account.
    """
    for tr in _iter_transactions(existing_transactions):
        if matches_existing(parsed, tr, account_id):
            logger.debug("Duplicate found", fit_id=parsed.fit_id, transaction_id=tr.id)
            return True
    return False
