import requests

from portal.core import store
from tests.conftest import make_response, sign_in


def test_login_opens_session_and_returns_role_home(client, api):
    api.return_value = make_response({
        'token': 'tok-1',
        'user': {'id': 7, 'email': 'v@example.com', 'roles': [{'id': 2, 'name': 'vendor'}]},
    })

    response = client.post('/api/auth/login', json={'email': 'v@example.com', 'password': 'secret1'})

    assert response.status_code == 200
    assert response.get_json()['redirect'] == '/vendor'
    with client.session_transaction() as sess:
        assert sess['token'] == 'tok-1'
        assert sess['role'] == 'vendor'
        assert sess['sid']


def test_login_validation_happens_before_any_request(client, api):
    response = client.post('/api/auth/login', json={'email': 'not-an-email', 'password': ''})

    assert response.status_code == 422
    assert response.get_json()['errors']['email'] == ['Please enter a valid email address']
    api.assert_not_called()


def test_login_rejected_by_api(client, api):
    api.return_value = make_response({'message': 'Invalid credentials'}, 401)

    response = client.post('/api/auth/login', json={'email': 'a@example.com', 'password': 'wrong'})

    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid credentials'


def test_login_page_shows_api_error(client, api):
    api.return_value = make_response({'message': 'Invalid credentials'}, 401)

    response = client.post('/login', data={'email': 'a@example.com', 'password': 'wrong'})

    assert response.status_code == 401
    assert b'Invalid credentials' in response.data


def test_login_page_backend_down_is_503(client, api):
    api.side_effect = requests.exceptions.ConnectionError('refused')

    response = client.post('/login', data={'email': 'a@example.com', 'password': 'secret1'})

    assert response.status_code == 503
    assert b'Backend not available' in response.data


def test_login_page_upstream_error_is_502(client, api):
    api.return_value = make_response({'message': 'Server Error'}, 500)

    response = client.post('/login', data={'email': 'a@example.com', 'password': 'secret1'})

    assert response.status_code == 502


def test_signup_page_shows_field_errors(client, api):
    response = client.post('/signup', data={
        'name': 'Jane', 'email': 'jane@example.com', 'password': 'secret1', 'confirm_password': 'other12',
    })

    assert response.status_code == 400
    assert b'Passwords do not match' in response.data
    api.assert_not_called()


def test_register_splits_name_and_defaults_to_customer(client, api):
    api.return_value = make_response({'token': 't', 'user': {'id': 1, 'role': 'customer'}})

    response = client.post('/api/auth/register', json={
        'name': 'Jane Mary Doe', 'email': 'jane@example.com',
        'password': 'secret1', 'confirm_password': 'secret1',
    })

    assert response.status_code == 200
    assert response.get_json()['redirect'] == '/customer'
    payload = api.call_args.kwargs['json']
    assert payload['first_name'] == 'Jane'
    assert payload['last_name'] == 'Mary Doe'
    assert payload['role'] == 'customer'


def test_register_forwards_location_step(client, api):
    api.return_value = make_response({'token': 't', 'user': {'id': 1, 'role': 'customer'}})

    client.post('/api/auth/register', json={
        'name': 'Jane Doe', 'email': 'jane@example.com', 'password': 'secret1', 'confirm_password': 'secret1',
        'phone': '+971500000000', 'nationality': 'AE',
        'street_address': 'Marina Walk', 'city': 'Dubai', 'emirate': 'Dubai',
        'latitude': '25.08', 'longitude': '55.14',
    })

    payload = api.call_args.kwargs['json']
    assert payload['phone'] == '+971500000000'
    assert payload['nationality'] == 'AE'
    assert (payload['latitude'], payload['longitude']) == (25.08, 55.14)
    assert payload['address'] == {
        'label': 'Home', 'street_address': 'Marina Walk', 'city': 'Dubai', 'emirate': 'Dubai',
        'latitude': 25.08, 'longitude': 55.14,
    }


def test_signup_page_rejects_bad_pin(client, api):
    response = client.post('/signup', data={
        'name': 'Jane Doe', 'email': 'jane@example.com', 'password': 'secret1', 'confirm_password': 'secret1',
        'latitude': '25.08', 'longitude': 'east',
    })

    assert response.status_code == 400
    assert b'Longitude must be between -180 and 180' in response.data
    api.assert_not_called()


def test_logout_clears_session_even_when_api_fails(client, api):
    sid = sign_in(client, 'admin')
    store.slice(sid, 'admin.customers')
    api.return_value = make_response({'message': 'Server error'}, 500)

    response = client.post('/api/auth/logout')

    assert response.status_code == 200
    with client.session_transaction() as sess:
        assert 'token' not in sess
    assert sid not in store._sessions


def test_api_routes_require_login(client, api):
    response = client.get('/api/admin/customers')
    assert response.status_code == 401
    api.assert_not_called()


def test_api_routes_require_role(customer_client, api):
    response = customer_client.get('/api/admin/customers')
    assert response.status_code == 403
    api.assert_not_called()


def test_pages_redirect_to_login_or_role_home(client):
    response = client.get('/admin')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/login')

    sign_in(client, 'technician')
    response = client.get('/admin')
    assert response.headers['Location'].endswith('/technician')


def test_super_admin_counts_as_admin(client, api):
    with client.session_transaction() as sess:
        sess['sid'] = 'sa'
        sess['token'] = 't'
        sess['user'] = {'id': 1, 'roles': ['super_admin']}
        sess['role'] = 'admin'
    api.return_value = make_response({'data': [], 'meta': {'current_page': 1, 'last_page': 1}})

    assert client.get('/api/admin/customers').status_code == 200
    store.drop_session('sa')


def test_index_redirects_by_role(client):
    assert client.get('/').headers['Location'].endswith('/login')
    sign_in(client, 'customer')
    assert client.get('/').headers['Location'].endswith('/customer')
