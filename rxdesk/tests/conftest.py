import pytest

from rxdesk import create_app
from rxdesk.tests.helpers import ADMIN, MODERATOR


@pytest.fixture
def app(tmp_path):
    return create_app('testing', DATA_DIR=str(tmp_path / 'data'))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def credentials(app):
    return app.extensions['rxdesk']['credentials']


@pytest.fixture
def prescriptions(app):
    return app.extensions['rxdesk']['prescriptions']


@pytest.fixture
def ipc(client):
    """Call a named gateway operation and return its result."""
    def call(operation, payload=None):
        r = client.post(f'/api/ipc/{operation}', json=payload)
        assert r.status_code == 200
        return r.get_json()
    return call


@pytest.fixture
def as_admin(ipc):
    assert ipc('registerAdmin', ADMIN)['success'] is True
    assert ipc('login', ADMIN)['success'] is True
    return ipc


@pytest.fixture
def as_moderator(as_admin):
    assert as_admin('createModerator', dict(MODERATOR, createdBy=ADMIN['username']))['success'] is True
    assert as_admin('login', MODERATOR)['success'] is True
    return as_admin
