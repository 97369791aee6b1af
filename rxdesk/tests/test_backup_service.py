from datetime import datetime

import pytest

from rxdesk.exceptions import MalformedBackup
from rxdesk.services import (
    backup_filename,
    decode_snapshot,
    encode_snapshot,
    export_snapshot,
    import_snapshot,
)
from rxdesk.tests.helpers import ADMIN, MODERATOR, rx


@pytest.fixture
def populated(credentials, prescriptions):
    credentials.register_admin(ADMIN['username'], ADMIN['password'])
    credentials.create_moderator(MODERATOR['username'], MODERATOR['password'], ADMIN['username'])
    prescriptions.intake(rx(patientName='Asha'))
    prescriptions.intake(rx(patientName='Ravi', aadharNumber='123456789012'))


def test_export_strips_password_hashes(populated, credentials, prescriptions):
    snapshot = export_snapshot(prescriptions, credentials)

    assert len(snapshot['users']) == 2
    for user in snapshot['users']:
        assert 'passwordHash' not in user
        assert set(user) == {'username', 'role', 'createdBy'}
    assert 'passwordHash' not in encode_snapshot(snapshot)


def test_export_metadata(populated, credentials, prescriptions):
    snapshot = export_snapshot(prescriptions, credentials)
    assert snapshot['metadata']['version'] == '1.0'
    assert snapshot['metadata']['description'] == 'Prescription App Backup'
    assert snapshot['metadata']['timestamp'].endswith('Z')

    custom = export_snapshot(prescriptions, credentials, description='Monthly backup')
    assert custom['metadata']['description'] == 'Monthly backup'


def test_round_trip_preserves_prescriptions(populated, credentials, prescriptions):
    live = prescriptions.list_prescriptions()
    decoded = decode_snapshot(encode_snapshot(export_snapshot(prescriptions, credentials)))
    assert decoded['prescriptions'] == live


@pytest.mark.parametrize('raw', [
    '{not json',
    '[]',
    '"text"',
    '{"prescriptions": []}',
    '{"metadata": {"version": "1.0"}}',
    '{"metadata": {"version": "1.0"}, "prescriptions": {"1": {}}}',
    b'\xff\xfe',
])
def test_decode_rejects_malformed_payloads(raw):
    with pytest.raises(MalformedBackup):
        decode_snapshot(raw)


def test_decode_does_not_check_entry_shape():
    snapshot = decode_snapshot({'metadata': {'version': '1.0'}, 'prescriptions': [{'odd': 1}]})
    assert snapshot['prescriptions'] == [{'odd': 1}]
    assert snapshot['users'] == []


def test_import_merges_prescriptions_only(populated, credentials, prescriptions):
    users_before = credentials.list_users()
    snapshot = {
        'metadata': {'version': '1.0', 'timestamp': '2024-01-01T00:00:00.000Z', 'description': 'x'},
        'prescriptions': [
            {'registrationNumber': 2, 'patientName': 'Duplicate'},
            {'registrationNumber': 8, 'patientName': 'Imported'},
        ],
        'users': [{'username': 'intruder', 'role': 'admin', 'createdBy': None}],
    }

    assert import_snapshot(encode_snapshot(snapshot), prescriptions) == 1
    assert [r['registrationNumber'] for r in prescriptions.list_prescriptions()] == [1, 2, 8]
    assert prescriptions.list_prescriptions()[1]['patientName'] == 'Ravi'
    assert credentials.list_users() == users_before

    # importing the same file again adds nothing
    assert import_snapshot(encode_snapshot(snapshot), prescriptions) == 0
    assert prescriptions.intake(rx())['registrationNumber'] == 9


def test_import_rejects_malformed_without_writing(populated, prescriptions):
    before = prescriptions.list_prescriptions()
    with pytest.raises(MalformedBackup):
        import_snapshot('{"prescriptions": []}', prescriptions)
    assert prescriptions.list_prescriptions() == before


def test_backup_filename():
    assert backup_filename(datetime(2024, 3, 9, 14, 0)) == 'prescription-app-backup-2024-03-09.json'
