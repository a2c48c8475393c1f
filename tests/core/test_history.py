"""
Unit tests for ImportHistory.
"""
import json

import pytest

from ledger_import.common.models import ImportRecord
from ledger_import.core.history import ImportHistory


def _record(n, account_id='acc-1'):
    return ImportRecord(
        id=f"imp-{n}",
        account_id=account_id,
        bank_code='INSJAM',
        file_name=f"file-{n}.xml",
        import_date=1700000000000 + n,
        date_range_start='2024-03-01',
        date_range_end='2024-03-31',
        transaction_count=1,
        transaction_ids=(f"tr-{n}",),
    )


@pytest.fixture(params=['memory', 'file'])
def store(request, tmp_path):
    if request.param == 'memory':
        return ImportHistory(max_records=3)
    return ImportHistory(tmp_path / "history" / "imports.json", max_records=3)


class TestImportHistory:

    def test_newest_first(self, store):
        store.add(_record(1))
        store.add(_record(2))
        assert [r.id for r in store.list()] == ['imp-2', 'imp-1']

    def test_cap_drops_oldest(self, store):
        for n in range(1, 6):
            store.add(_record(n))
        assert [r.id for r in store.list()] == ['imp-5', 'imp-4', 'imp-3']

    def test_remove(self, store):
        store.add(_record(1))
        store.add(_record(2))

        assert store.remove('imp-1')
        assert not store.remove('imp-1')
        assert [r.id for r in store.list()] == ['imp-2']

    def test_filter_by_account(self, store):
        store.add(_record(1, 'acc-1'))
        store.add(_record(2, 'acc-2'))
        assert [r.id for r in store.list('acc-2')] == ['imp-2']

    def test_get(self, store):
        store.add(_record(1))
        assert store.get('imp-1') == _record(1)
        assert store.get('imp-9') is None

    def test_clear(self, store):
        store.add(_record(1))
        store.clear()
        assert store.list() == []

    def test_default_cap_is_100(self):
        history = ImportHistory()
        for n in range(105):
            history.add(_record(n))
        records = history.list()
        assert len(records) == 100
        assert records[-1].id == 'imp-5'


class TestPersistence:

    def test_survives_reopen(self, tmp_path):
        path = tmp_path / "imports.json"
        ImportHistory(path).add(_record(1))
        assert ImportHistory(path).list() == [_record(1)]

    def test_corrupted_file_reads_empty(self, tmp_path):
        path = tmp_path / "imports.json"
        path.write_text("{not json", encoding='utf-8')
        assert ImportHistory(path).list() == []

    def test_non_list_reads_empty(self, tmp_path):
        path = tmp_path / "imports.json"
        path.write_text(json.dumps({"id": "x"}), encoding='utf-8')
        assert ImportHistory(path).list() == []

    def test_corrupted_file_is_replaced_on_add(self, tmp_path):
        path = tmp_path / "imports.json"
        path.write_text("garbage", encoding='utf-8')

        history = ImportHistory(path)
        history.add(_record(1))
        assert [r.id for r in history.list()] == ['imp-1']

    def test_malformed_entries_skipped(self, tmp_path):
        path = tmp_path / "imports.json"
        path.write_text(json.dumps([{"id": "broken"}, _record(1).to_dict()]), encoding='utf-8')
        assert [r.id for r in ImportHistory(path).list()] == ['imp-1']
