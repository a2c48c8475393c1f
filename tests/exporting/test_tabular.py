import pandas as pd

from ledger_import.exporting import frame_to_csv, parse_result_to_frame, transactions_to_frame
from ledger_import.parsing import parse_statement


def test_parse_result_frame(rzbmru_csv):
    df = parse_result_to_frame(parse_statement(rzbmru_csv, "raif.csv"))

    assert list(df['fit_id']) == ['DOC1', '16.03.2024 09:00_2']
    assert df['amount'].sum() == 1500.0 - 500.25


def test_transactions_frame(make_tr):
    df = transactions_to_frame([
        make_tr(date='2024-03-20', income=100.0, tag=['salary']),
        make_tr(date='2024-03-01', outcome=40.0, tag=['food', 'cafe']),
    ])

    assert list(df['date']) == ['2024-03-01', '2024-03-20']
    assert list(df['amount']) == [-40.0, 100.0]
    assert df.loc[0, 'tag'] == 'food,cafe'


def test_empty_frames():
    df = transactions_to_frame([])
    assert isinstance(df, pd.DataFrame)
    assert df.empty
    assert 'payee' in df.columns


def test_csv_uses_semicolons(make_tr):
    csv = frame_to_csv(transactions_to_frame([make_tr(outcome=1.0, payee='Shop')]))
    header = csv.splitlines()[0]
    assert header.startswith('id;date;income')
    assert header.endswith(';amount')
