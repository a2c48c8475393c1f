"""
Unit tests for statement-to-account matching.
"""
import pytest

from ledger_import.common.models import Account, ParseResult
from ledger_import.core.matcher import (
    get_accounts_by_swift,
    match_account_by_number,
    match_account_by_swift,
    suggest_account,
)


def _result(bank_code='INSJAM', account_number='2052822145661001'):
    return ParseResult(bank_code, account_number, 'AMD', '2024-03-01', '2024-03-31', [])


def _index(*accounts):
    return {a.id: a for a in accounts}


class TestMatchByNumber:

    def test_exact_bank_account_number(self):
        acc = Account(id='a', bank_account_number='2052822145661001')
        assert match_account_by_number(_index(acc), '2052822145661001') is acc

    def test_sync_id_contained_in_number(self):
        acc = Account(id='a', sync_id=['0000', '1001'])
        assert match_account_by_number(_index(acc), '2052822145661001') is acc

    def test_sync_id_must_be_substring(self):
        acc = Account(id='a', sync_id=['9999'])
        assert match_account_by_number(_index(acc), '2052822145661001') is None

    def test_archived_skipped(self):
        acc = Account(id='a', archive=True, bank_account_number='123')
        assert match_account_by_number(_index(acc), '123') is None

    def test_empty_number(self):
        acc = Account(id='a', bank_account_number='')
        assert match_account_by_number(_index(acc), '') is None


class TestMatchBySwift:

    def test_case_insensitive(self):
        acc = Account(id='a', swift_code='insjam')
        assert match_account_by_swift(_index(acc), 'INSJAM') is acc

    def test_only_first_six_chars(self):
        acc = Account(id='a', swift_code='INSJAM')
        assert match_account_by_swift(_index(acc), 'INSJAM22XXX') is acc

    def test_archived_skipped(self):
        acc = Account(id='a', swift_code='INSJAM', archive=True)
        assert match_account_by_swift(_index(acc), 'INSJAM') is None

    def test_accounts_by_swift(self):
        a = Account(id='a', swift_code='RZBMRU')
        b = Account(id='b', swift_code='rzbmru')
        c = Account(id='c', swift_code='RZBMRU', archive=True)
        d = Account(id='d', swift_code='INSJAM')
        assert get_accounts_by_swift(_index(a, b, c, d), 'RZBMRU') == [a, b]


class TestSuggestAccount:

    def test_number_beats_swift(self):
        by_swift = Account(id='swift', swift_code='INSJAM')
        by_number = Account(id='number', bank_account_number='2052822145661001')
        assert suggest_account(_index(by_swift, by_number), _result()) is by_number

    def test_falls_back_to_swift(self):
        by_swift = Account(id='swift', swift_code='INSJAM')
        other = Account(id='other', bank_account_number='111')
        assert suggest_account(_index(other, by_swift), _result()) is by_swift

    def test_no_account_number_uses_swift(self):
        acc = Account(id='r', swift_code='RZBMRU', sync_id=[''])
        assert suggest_account(_index(acc), _result('RZBMRU', '')) is acc

    def test_no_match(self):
        acc = Account(id='a', swift_code='OTHERX')
        assert suggest_account(_index(acc), _result()) is None

    @pytest.mark.parametrize("archived_field", ['bank_account_number', 'swift_code'])
    def test_archived_never_suggested(self, archived_field):
        values = {'bank_account_number': '2052822145661001', 'swift_code': 'INSJAM'}
        acc = Account(id='a', archive=True, **{archived_field: values[archived_field]})
        assert suggest_account(_index(acc), _result()) is None
