"""
Account matching for parsed statements.

``accounts`` is always a mapping of account id -> Account. Iteration order
only breaks ties; callers must not rely on which of several equally good
accounts comes back.
"""
from typing import List, Mapping, Optional

from ledger_import.common.models import Account, ParseResult

SWIFT_PREFIX_LENGTH = 6


def _swift_prefix(bank_code: str) -> str:
    return bank_code[:SWIFT_PREFIX_LENGTH].upper()


def match_account_by_swift(accounts: Mapping[str, Account], bank_code: str) -> Optional[Account]:
    """First active account whose SWIFT code equals the bank code (case-insensitive)."""
    prefix = _swift_prefix(bank_code)
    for account in accounts.values():
        if account.archive:
            continue
        if account.swift_code and account.swift_code.upper() == prefix:
            return account
    return None


def match_account_by_number(accounts: Mapping[str, Account], account_number: str) -> Optional[Account]:
    """
    First active account that either stores exactly this bank account
    number, or has a sync id contained in it.
    """
    if not account_number:
        return None

    for account in accounts.values():
        if account.archive:
            continue
        if account.bank_account_number == account_number:
            return account
        # sync ids are partial account numbers (often the last digits)
        if account.sync_id and any(sync_id in account_number for sync_id in account.sync_id):
            return account
    return None


def get_accounts_by_swift(accounts: Mapping[str, Account], bank_code: str) -> List[Account]:
    """All active accounts held in the bank with this code."""
    prefix = _swift_prefix(bank_code)
    return [
        account for account in accounts.values()
        if not account.archive and account.swift_code and account.swift_code.upper() == prefix
    ]


def suggest_account(accounts: Mapping[str, Account], parse_result: ParseResult) -> Optional[Account]:
    """
    Best matching account for a parsed statement.
    Priority: 1) account number 2) SWIFT code
    """
    if parse_result.account_number:
        by_number = match_account_by_number(accounts, parse_result.account_number)
        if by_number:
            return by_number

    return match_account_by_swift(accounts, parse_result.bank_code)
