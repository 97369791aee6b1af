import pytest

from rxdesk import create_app
from rxdesk.config import ProductionConfig


def test_collections_live_in_data_dir(app, tmp_path, prescriptions, credentials):
    prescriptions.list_prescriptions()
    credentials.list_users()
    assert (tmp_path / 'data' / 'prescriptions.json').exists()
    assert (tmp_path / 'data' / 'users.json').exists()


def test_unwritable_data_dir_is_fatal(tmp_path):
    blocker = tmp_path / 'not-a-dir'
    blocker.write_text('')
    with pytest.raises(RuntimeError):
        create_app('testing', DATA_DIR=str(blocker / 'data'))


def test_production_requires_secret_key(monkeypatch):
    monkeypatch.setattr(ProductionConfig, 'SECRET_KEY', None)
    with pytest.raises(ValueError):
        ProductionConfig()


def test_unknown_endpoint_returns_json(client):
    r = client.get('/nowhere')
    assert r.status_code == 404
    assert r.get_json() == {'success': False, 'error': 'Endpoint not found'}


def test_security_headers(client):
    r = client.post('/api/ipc/checkAdminExists')
    assert r.headers['X-Content-Type-Options'] == 'nosniff'
    assert r.headers['X-Frame-Options'] == 'DENY'
    assert r.headers['Cache-Control'] == 'no-store'


def test_cors_allows_only_ui_origins(client):
    allowed = client.post('/api/ipc/checkAdminExists', headers={'Origin': 'http://localhost:5173'})
    assert allowed.headers.get('Access-Control-Allow-Origin') == 'http://localhost:5173'

    foreign = client.post('/api/ipc/checkAdminExists', headers={'Origin': 'http://evil.example'})
    assert 'Access-Control-Allow-Origin' not in foreign.headers
