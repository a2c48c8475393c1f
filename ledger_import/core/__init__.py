from .duplicates import is_duplicate
from .errors import AccountNotFoundError, ImportErrorBase, ImportRecordNotFoundError
from .history import ImportHistory
from .importer import StatementImporter
from .ledger import AccountDirectory, TransactionStore
from .matcher import (
    get_accounts_by_swift,
    match_account_by_number,
    match_account_by_swift,
    suggest_account,
)

__all__ = [
    'is_duplicate',
    'AccountNotFoundError',
    'ImportErrorBase',
    'ImportRecordNotFoundError',
    'ImportHistory',
    'StatementImporter',
    'AccountDirectory',
    'TransactionStore',
    'get_accounts_by_swift',
    'match_account_by_number',
    'match_account_by_swift',
    'suggest_account',
]
