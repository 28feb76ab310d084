"""
Unit tests for the JSON file stores.
"""

import json
import os
import stat

from prometheus_client import REGISTRY

from cashcarry.database import JsonStore


def save_failures(store_name):
    return REGISTRY.get_sample_value('cashcarry_store_save_failures_total', {'store': store_name}) or 0


class TestLoad:
    """JsonStore.load degrades to an empty collection instead of raising."""

    def test_missing_file_loads_empty(self, tmp_path):
        store = JsonStore(str(tmp_path / 'products.json'))

        assert store.load() == []

    def test_malformed_json_loads_empty(self, tmp_path):
        path = tmp_path / 'orders.json'
        path.write_text('{not json', encoding='utf-8')

        assert JsonStore(str(path)).load() == []

    def test_non_array_loads_empty(self, tmp_path):
        path = tmp_path / 'users.json'
        path.write_text('{"id": 1}', encoding='utf-8')

        assert JsonStore(str(path)).load() == []

    def test_loads_records_in_file_order(self, tmp_path):
        path = tmp_path / 'products.json'
        path.write_text(json.dumps([{'id': 5}, {'id': 2}]), encoding='utf-8')

        store = JsonStore(str(path))

        assert [r['id'] for r in store.load()] == [5, 2]


class TestSave:
    """JsonStore.save overwrites the whole file atomically."""

    def test_save_writes_full_array(self, tmp_path):
        path = tmp_path / 'products.json'
        store = JsonStore(str(path))
        store.load()

        store.append({'id': 1, 'name': 'Oil'})
        store.append({'id': 2, 'name': 'Rice'})

        assert json.loads(path.read_text(encoding='utf-8')) == [
            {'id': 1, 'name': 'Oil'},
            {'id': 2, 'name': 'Rice'},
        ]

    def test_save_leaves_no_temp_files(self, tmp_path):
        store = JsonStore(str(tmp_path / 'orders.json'))
        store.save([{'id': 1}])

        assert os.listdir(tmp_path) == ['orders.json']

    def test_save_creates_missing_directory(self, tmp_path):
        path = tmp_path / 'nested' / 'users.json'

        assert JsonStore(str(path)).save([{'id': 1}]) is True
        assert path.exists()

    def test_save_failure_is_reported_not_raised(self, tmp_path):
        """A directory in place of the file makes the rename fail; in-memory state is kept."""
        path = tmp_path / 'orders.json'
        path.mkdir()
        store = JsonStore(str(path))

        assert store.save([{'id': 1}]) is False
        assert store.records == [{'id': 1}]
        assert os.listdir(tmp_path) == ['orders.json']

    def test_save_failure_is_counted(self, tmp_path):
        path = tmp_path / 'orders.json'
        path.mkdir()
        store = JsonStore(str(path), 'broken-orders')
        before = save_failures('broken-orders')

        store.save([{'id': 1}])

        assert save_failures('broken-orders') == before + 1

    def test_save_keeps_existing_file_mode(self, tmp_path):
        """Rewriting a data file doesn't tighten its permissions."""
        path = tmp_path / 'products.json'
        path.write_text('[]', encoding='utf-8')
        path.chmod(0o644)
        store = JsonStore(str(path))
        store.load()

        store.append({'id': 1})

        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_new_file_mode_follows_umask(self, tmp_path):
        path = tmp_path / 'users.json'
        old_umask = os.umask(0o022)
        try:
            JsonStore(str(path)).save([{'id': 1}])
        finally:
            os.umask(old_umask)

        assert stat.S_IMODE(path.stat().st_mode) == 0o644


class TestIds:
    """Id helpers."""

    def test_next_id_on_empty_store_is_one(self, tmp_path):
        assert JsonStore(str(tmp_path / 'x.json')).next_id() == 1

    def test_next_id_is_max_plus_one(self, tmp_path):
        store = JsonStore(str(tmp_path / 'x.json'))
        store.records = [{'id': 3}, {'id': 9}, {'id': 4}]

        assert store.next_id() == 10

    def test_get_does_not_match_booleans_or_strings(self, tmp_path):
        store = JsonStore(str(tmp_path / 'x.json'))
        store.records = [{'id': 1, 'name': 'Oil'}]

        assert store.get(1)['name'] == 'Oil'
        assert store.get(True) is None
        assert store.get('1') is None
