"""
In-memory ledger store and account directory.

The importer only needs ``apply_batch`` and ``get_transactions_by_id`` from
the ledger and ``get``/``get_accounts`` from the directory; any object with
those methods can stand in for them.
"""
import uuid
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Union

from ledger_import.common.logging_config import get_logger
from ledger_import.common.models import Account, Transaction, DELETED_AMOUNT, now_ms
from ledger_import.filtering.helpers import is_viewed

logger = get_logger(__name__)

Ids = Union[str, Iterable[str]]


def _as_list(ids: Ids) -> List[str]:
    if isinstance(ids, str):
        return [ids]
    return list(ids)


class TransactionStore:
    """Transactions keyed by id."""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._transactions: Dict[str, Transaction] = {}
        if transactions:
            self.apply_batch(transactions)

    def apply_batch(self, transactions: Iterable[Transaction]) -> None:
        """Insert or replace transactions by id."""
        batch = list(transactions)
        for tr in batch:
            self._transactions[tr.id] = tr
        logger.debug("Applied transaction batch", count=len(batch))

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def get_transactions_by_id(self) -> Dict[str, Transaction]:
        return dict(self._transactions)

    def list(self) -> List[Transaction]:
        return list(self._transactions.values())

    def __len__(self):
        return len(self._transactions)

    def _require(self, transaction_id: str) -> Transaction:
        tr = self._transactions.get(transaction_id)
        if tr is None:
            raise KeyError(f"Transaction not found: {transaction_id}")
        return tr

    # Transaction operations

    def delete_transactions(self, ids: Ids) -> None:
        """Soft delete: sets the ``deleted`` flag."""
        now = now_ms()
        self.apply_batch(replace(self._require(i), deleted=True, changed=now) for i in _as_list(ids))

    def delete_transactions_permanently(self, ids: Ids) -> None:
        """Marks transactions with the sentinel amounts the sync server treats as removed."""
        now = now_ms()
        self.apply_batch(
            replace(self._require(i), income=DELETED_AMOUNT, outcome=DELETED_AMOUNT, changed=now)
            for i in _as_list(ids)
        )

    def restore_transaction(self, transaction_id: str) -> Transaction:
        """Re-creates a deleted transaction under a new id."""
        tr = replace(
            self._require(transaction_id),
            deleted=False,
            changed=now_ms(),
            id=str(uuid.uuid4()),
        )
        self.apply_batch([tr])
        return tr

    def mark_viewed(self, ids: Ids, viewed: bool) -> None:
        now = now_ms()
        changed = [
            replace(tr, viewed=viewed, changed=now)
            for tr in (self._require(i) for i in _as_list(ids))
            if is_viewed(tr) != viewed
        ]
        self.apply_batch(changed)

    def apply_changes(self, patch: dict) -> Transaction:
        """Shallow-merges ``patch`` (which must carry ``id``) into a transaction."""
        patch = dict(patch)
        transaction_id = patch.pop('id')
        tr = replace(self._require(transaction_id), **patch, changed=now_ms())
        self.apply_batch([tr])
        return tr


class AccountDirectory:
    """Accounts keyed by id."""

    def __init__(self, accounts: Optional[Iterable[Account]] = None):
        self._accounts: Dict[str, Account] = {}
        for account in accounts or ():
            self.add(account)

    def add(self, account: Account) -> None:
        self._accounts[account.id] = account

    def get(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def get_accounts(self) -> Dict[str, Account]:
        return dict(self._accounts)

    def debt_account_ids(self) -> frozenset:
        return frozenset(a.id for a in self._accounts.values() if a.type == 'debt')
