from tests.conftest import make_response


def _customers(status='active'):
    return {
        'data': [{'id': 1, 'name': 'Ali', 'status': status}, {'id': 2, 'name': 'Sara', 'status': 'active'}],
        'meta': {'current_page': 1, 'last_page': 3, 'per_page': 10, 'total': 25},
    }


def test_customers_list_forwards_query(admin_client, api):
    api.return_value = make_response(_customers())

    response = admin_client.get('/api/admin/customers?page=2&per_page=20&search=al&status=all')

    assert response.status_code == 200
    assert response.get_json()['pagination']['has_next'] is True
    method, url = api.call_args.args
    assert (method, url) == ('GET', 'http://api.test/api/admin/customers')
    assert api.call_args.kwargs['params'] == {'page': 2, 'per_page': 20, 'search': 'al'}
    assert api.call_args.kwargs['headers']['Authorization'] == 'Bearer admin-token'


def test_suspend_flips_badge_without_refetch(admin_client, api):
    api.return_value = make_response(_customers())
    admin_client.get('/api/admin/customers')

    api.return_value = make_response({'message': 'Customer suspended'})
    response = admin_client.post('/api/admin/customers/1/suspend')

    body = response.get_json()
    assert response.status_code == 200
    assert body['message'] == 'Customer suspended'
    assert body['item']['status'] == 'suspended'
    assert body['list']['data'][0]['status'] == 'suspended'
    methods = [call.args[0] for call in api.call_args_list]
    assert methods == ['GET', 'POST']


def test_suspend_row_outside_cached_page_still_reports_it(admin_client, api):
    api.return_value = make_response(_customers())
    admin_client.get('/api/admin/customers')
    api.return_value = make_response({
        'data': [{'id': 11, 'name': 'Omar', 'status': 'active'}],
        'meta': {'current_page': 2, 'last_page': 3, 'per_page': 10, 'total': 25},
    })
    admin_client.get('/api/admin/customers?page=2')

    api.return_value = make_response({'message': 'Customer suspended'})
    body = admin_client.post('/api/admin/customers/1/suspend').get_json()

    assert body['item'] == {'id': '1', 'status': 'suspended'}
    assert body['removed'] is False
    assert [row['id'] for row in body['list']['data']] == [11]


def test_suspend_without_cached_list(admin_client, api):
    api.return_value = make_response({'message': 'Customer suspended'})
    body = admin_client.post('/api/admin/customers/7/suspend').get_json()

    assert body['item'] == {'id': '7', 'status': 'suspended'}
    assert body['removed'] is False
    assert body['list'] is None


def test_failed_suspend_leaves_cached_list_untouched(admin_client, api):
    api.return_value = make_response(_customers())
    admin_client.get('/api/admin/customers')

    api.return_value = make_response({'message': 'Customer not found'}, 404)
    response = admin_client.post('/api/admin/customers/1/suspend')
    assert response.status_code == 404
    assert response.get_json()['error'] == 'Customer not found'

    api.return_value = make_response({'message': 'ok'})
    body = admin_client.post('/api/admin/customers/2/unsuspend').get_json()
    assert body['list']['data'][0]['status'] == 'active'


def test_unknown_action_is_not_routed(admin_client, api):
    assert admin_client.post('/api/admin/customers/1/delete').status_code == 404
    api.assert_not_called()


def test_approving_application_removes_it(admin_client, api):
    api.return_value = make_response({
        'data': [{'id': 5, 'company_name': 'Clean Co'}, {'id': 6, 'company_name': 'Fix It'}],
        'meta': {'current_page': 1, 'last_page': 1, 'per_page': 10, 'total': 2},
    })
    admin_client.get('/api/admin/vendors/applications')

    api.return_value = make_response({'message': 'Approved'})
    body = admin_client.post('/api/admin/vendors/5/approve').get_json()

    assert [row['id'] for row in body['list']['data']] == [6]
    assert body['removed'] is True
    assert body['list']['meta']['total'] == 1
    assert api.call_args.args[1] == 'http://api.test/api/admin/companies/5/approve'


def test_reject_requires_reason(admin_client, api):
    response = admin_client.post('/api/admin/vendors/5/reject', json={'reason': '  '})
    assert response.status_code == 422
    assert response.get_json()['error'] == 'Please provide a reason for rejection'
    api.assert_not_called()


def test_payout_approval_with_amount(admin_client, api):
    api.return_value = make_response({
        'data': [{'id': 9, 'status': 'pending', 'requested_amount': 500}],
        'meta': {'current_page': 1, 'last_page': 1, 'per_page': 10, 'total': 1},
    })
    admin_client.get('/api/admin/payouts')

    api.return_value = make_response({'message': 'Payout approved'})
    body = admin_client.post('/api/admin/payouts/9/approve', json={'approved_amount': '450'}).get_json()

    assert api.call_args.kwargs['json'] == {'approved_amount': 450.0}
    assert body['item']['status'] == 'processing'
    assert body['item']['approved_amount'] == 450.0


def test_adjustment_validation(admin_client, api):
    response = admin_client.post('/api/admin/adjustments', json={'vendor_id': 1, 'type': 'credit', 'amount': 0})
    assert response.status_code == 422
    assert response.get_json()['errors']['amount'] == ['Amount must be greater than 0']
    api.assert_not_called()


def test_backend_down_returns_503_with_retry(admin_client, api):
    import requests
    api.side_effect = requests.exceptions.ConnectionError('refused')

    response = admin_client.get('/api/admin/dashboard')

    assert response.status_code == 503
    body = response.get_json()
    assert body['error'] == 'Backend not available'
    assert body['retry'] == '/api/admin/dashboard'


def test_upstream_server_error_maps_to_502(admin_client, api):
    api.return_value = make_response({'message': 'Boom'}, 500)
    response = admin_client.get('/api/admin/payouts/stats')
    assert response.status_code == 502
    assert response.get_json()['error'] == 'Boom'


def test_customer_search_is_debounced(app, admin_client, api):
    api.return_value = make_response(_customers())
    response = admin_client.get('/api/admin/customers/search?search=ali')
    assert response.status_code == 200
    assert api.call_args.kwargs['params']['search'] == 'ali'
    assert 'portal_debouncers' in app.extensions
