from enum import Enum
from typing import Collection

from ledger_import.common.models import Transaction, DELETED_AMOUNT


class TrType(str, Enum):
    INCOME = 'income'
    OUTCOME = 'outcome'
    TRANSFER = 'transfer'
    INCOME_DEBT = 'incomeDebt'
    OUTCOME_DEBT = 'outcomeDebt'


def is_deleted(tr: Transaction) -> bool:
    """Explicit flag, or both amounts set to the deletion sentinel."""
    if tr.deleted:
        return True
    return tr.income == DELETED_AMOUNT and tr.outcome == DELETED_AMOUNT


def is_viewed(tr: Transaction) -> bool:
    return bool(tr.viewed)


def get_type(tr: Transaction, debt_account_ids: Collection[str] = ()) -> TrType:
    """
    Classify a transaction. Money sent into a debt account is lent out
    (outcome debt); money taken from it is returned or borrowed (income debt).
    """
    if tr.income_account in debt_account_ids:
        return TrType.OUTCOME_DEBT
    if tr.outcome_account in debt_account_ids:
        return TrType.INCOME_DEBT
    if tr.income and tr.outcome:
        return TrType.TRANSFER
    if tr.outcome:
        return TrType.OUTCOME
    return TrType.INCOME
