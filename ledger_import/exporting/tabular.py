"""
DataFrame views of parsed statements and ledger transactions.
"""
from typing import Iterable

import pandas as pd

from ledger_import.common.models import ParseResult, Transaction

PARSED_COLUMNS = ['fit_id', 'date', 'amount', 'currency', 'payee', 'memo', 'account_number']
TRANSACTION_COLUMNS = [
    'id', 'date', 'income', 'income_account', 'outcome', 'outcome_account',
    'payee', 'original_payee', 'comment', 'tag', 'deleted',
]


def parse_result_to_frame(result: ParseResult) -> pd.DataFrame:
    if not result.transactions:
        return pd.DataFrame(columns=PARSED_COLUMNS)
    df = pd.DataFrame([t.to_dict() for t in result.transactions], columns=PARSED_COLUMNS)
    return df.sort_values(by='date', kind='stable').reset_index(drop=True)


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    rows = [tr.to_dict() for tr in transactions]
    if not rows:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)

    df = pd.DataFrame(rows)[TRANSACTION_COLUMNS]
    df['tag'] = df['tag'].apply(lambda tags: ','.join(tags) if tags else '')
    # Signed amount from the account's point of view
    df['amount'] = df['income'] - df['outcome']
    return df.sort_values(by='date', kind='stable').reset_index(drop=True)


def frame_to_csv(df: pd.DataFrame) -> str:
    return df.to_csv(index=False, sep=';')
