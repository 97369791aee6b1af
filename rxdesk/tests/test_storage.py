import json

import pytest

from rxdesk.exceptions import StorageError
from rxdesk.storage import JsonCollection


def test_missing_file_is_created_empty(tmp_path):
    path = tmp_path / 'users.json'
    collection = JsonCollection(path)
    assert collection.load() == []
    assert path.exists()
    assert json.loads(path.read_text()) == []


def test_save_writes_pretty_printed_array(tmp_path):
    path = tmp_path / 'prescriptions.json'
    collection = JsonCollection(path)
    collection.save([{'registrationNumber': 1, 'patientName': 'Asha'}])
    text = path.read_text(encoding='utf-8')
    assert text.startswith('[\n  {\n    "registrationNumber": 1')
    assert collection.load() == [{'registrationNumber': 1, 'patientName': 'Asha'}]


def test_non_ascii_is_kept_readable(tmp_path):
    collection = JsonCollection(tmp_path / 'p.json')
    collection.save([{'patientName': 'राम'}])
    assert 'राम' in (tmp_path / 'p.json').read_text(encoding='utf-8')


def test_corrupt_file_raises_storage_error(tmp_path):
    path = tmp_path / 'users.json'
    path.write_text('{not json')
    with pytest.raises(StorageError):
        JsonCollection(path).load()


def test_non_array_file_raises_storage_error(tmp_path):
    path = tmp_path / 'users.json'
    path.write_text('{"users": []}')
    with pytest.raises(StorageError) as exc:
        JsonCollection(path).load()
    assert 'expected a JSON array' in exc.value.message


def test_failed_write_keeps_previous_content(tmp_path):
    path = tmp_path / 'p.json'
    collection = JsonCollection(path)
    collection.save([{'registrationNumber': 1}])

    with pytest.raises(StorageError):
        collection.save([{'registrationNumber': object()}])

    assert collection.load() == [{'registrationNumber': 1}]
    assert [p.name for p in tmp_path.iterdir()] == ['p.json']


def test_transaction_yields_loaded_records(tmp_path):
    collection = JsonCollection(tmp_path / 'p.json')
    collection.save([{'registrationNumber': 1}])
    with collection.transaction() as records:
        records.append({'registrationNumber': 2})
        collection.save(records)
    assert [r['registrationNumber'] for r in collection.load()] == [1, 2]
