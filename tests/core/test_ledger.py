"""
Unit tests for the in-memory transaction store and account directory.
"""
import pytest

from ledger_import.common.models import Account, DELETED_AMOUNT
from ledger_import.core.ledger import AccountDirectory, TransactionStore
from ledger_import.filtering import is_deleted


@pytest.fixture
def store(make_tr):
    return TransactionStore([
        make_tr(id='a', outcome=10.0, payee='Shop'),
        make_tr(id='b', income=20.0, viewed=True),
    ])


class TestTransactionStore:

    def test_apply_batch_replaces_by_id(self, store, make_tr):
        store.apply_batch([make_tr(id='a', outcome=99.0)])
        assert store.get('a').outcome == 99.0
        assert len(store) == 2

    def test_snapshot_is_a_copy(self, store, make_tr):
        snapshot = store.get_transactions_by_id()
        store.apply_batch([make_tr(id='c')])
        assert 'c' not in snapshot

    def test_delete(self, store):
        store.delete_transactions('a')
        tr = store.get('a')
        assert tr.deleted
        assert is_deleted(tr)
        assert tr.changed > 0

    def test_delete_permanently(self, store):
        store.delete_transactions_permanently(['a', 'b'])
        for tr in store.list():
            assert tr.income == DELETED_AMOUNT
            assert tr.outcome == DELETED_AMOUNT
            assert not tr.deleted
            assert is_deleted(tr)

    def test_delete_unknown_changes_nothing(self, store):
        with pytest.raises(KeyError):
            store.delete_transactions(['a', 'missing'])
        assert not store.get('a').deleted

    def test_restore(self, store):
        store.delete_transactions('a')
        restored = store.restore_transaction('a')

        assert restored.id != 'a'
        assert not restored.deleted
        assert store.get(restored.id).payee == 'Shop'
        assert store.get('a').deleted

    def test_mark_viewed(self, store):
        before = store.get('b').changed
        store.mark_viewed(['a', 'b'], True)

        assert store.get('a').viewed
        # already viewed, left untouched
        assert store.get('b').changed == before

    def test_apply_changes(self, store):
        tr = store.apply_changes({'id': 'a', 'comment': 'lunch', 'tag': ['food']})
        assert tr.comment == 'lunch'
        assert store.get('a').tag == ['food']
        assert store.get('a').payee == 'Shop'


class TestAccountDirectory:

    def test_lookup(self):
        directory = AccountDirectory([Account(id='x'), Account(id='d', type='debt')])
        assert directory.get('x').id == 'x'
        assert directory.get('nope') is None
        assert set(directory.get_accounts()) == {'x', 'd'}
        assert directory.debt_account_ids() == {'d'}
