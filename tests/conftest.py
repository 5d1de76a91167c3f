"""
Pytest fixtures shared by the portal tests

The remote API is never contacted: every test that reaches it patches
requests.Session.request and inspects the calls it received.
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from portal.config.settings import TestingConfig
from portal.core import portal_logs, store
from portal.portal_app import create_app


def make_response(body=None, status=200):
    """Fake requests.Response carrying a JSON body"""
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 400
    if body is None:
        response.json.side_effect = ValueError('No JSON')
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    portal_logs.clear()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def api():
    """Patched transport; set return_value or side_effect per test"""
    with patch.object(requests.Session, 'request') as request:
        request.return_value = make_response({})
        yield request


def sign_in(client, role, user_id=1, sid=None):
    """Put an authenticated user of the given role into the test session"""
    sid = sid or f'{role}-session'
    with client.session_transaction() as sess:
        sess['sid'] = sid
        sess['token'] = f'{role}-token'
        sess['user'] = {'id': user_id, 'email': f'{role}@example.com', 'role': role}
        sess['role'] = role
    return sid


@pytest.fixture
def admin_client(client):
    sid = sign_in(client, 'admin')
    yield client
    store.drop_session(sid)


@pytest.fixture
def customer_client(client):
    sid = sign_in(client, 'customer')
    yield client
    store.drop_session(sid)


@pytest.fixture
def vendor_client(client):
    sid = sign_in(client, 'vendor')
    yield client
    store.drop_session(sid)


@pytest.fixture
def technician_client(client):
    sid = sign_in(client, 'technician')
    yield client
    store.drop_session(sid)
