import io

from portal.core.validation import IMAGE_BAD_TYPE
from tests.conftest import make_response


def _page(rows):
    return {'data': rows, 'meta': {'current_page': 1, 'last_page': 1, 'per_page': 10, 'total': len(rows)}}


def test_vendor_confirm_order(vendor_client, api):
    api.return_value = make_response(_page([{'id': 21, 'status': 'pending'}]))
    vendor_client.get('/api/vendor/orders?date=2024-05-01')
    assert api.call_args.kwargs['params']['date'] == '2024-05-01'

    api.return_value = make_response({'message': 'Order confirmed'})
    body = vendor_client.post('/api/vendor/orders/21/confirm').get_json()

    assert body['item']['status'] == 'confirmed'


def test_vendor_decline_requires_reason(vendor_client, api):
    response = vendor_client.post('/api/vendor/orders/21/decline', json={})
    assert response.status_code == 422
    api.assert_not_called()


def test_vendor_invite_technician(vendor_client, api):
    api.return_value = make_response({'data': {'id': 3}}, 201)

    response = vendor_client.post('/api/vendor/technicians', json={'name': 'Omar Khan', 'email': 'omar@example.com'})

    assert response.status_code == 201
    assert api.call_args.kwargs['json'] == {'first_name': 'Omar', 'last_name': 'Khan', 'email': 'omar@example.com'}


def test_vendor_payout_request_parses_order_ids(vendor_client, api):
    api.return_value = make_response({'data': {'id': 1}}, 201)

    vendor_client.post('/api/vendor/payouts', data={'order_ids': '4,5', 'request_notes': 'May'})

    assert api.call_args.kwargs['json'] == {'order_ids': [4, 5], 'request_notes': 'May'}


def test_technician_job_lifecycle(technician_client, api):
    api.return_value = make_response(_page([{'id': 7, 'technician_status': 'assigned'}]))
    technician_client.get('/api/technician/jobs')

    api.return_value = make_response({'message': 'ok'})
    for action, status in (('acknowledge', 'acknowledged'), ('on-the-way', 'on_the_way'),
                           ('arrived', 'arrived'), ('start', 'in_progress'), ('complete', 'completed')):
        body = technician_client.post(f'/api/technician/jobs/7/{action}').get_json()
        assert body['item']['technician_status'] == status


def test_technician_decline_removes_job(technician_client, api):
    api.return_value = make_response(_page([{'id': 7}, {'id': 8}]))
    technician_client.get('/api/technician/jobs')

    api.return_value = make_response({'message': 'Declined'})
    body = technician_client.post('/api/technician/jobs/7/decline', json={'reason': 'Too far'}).get_json()

    assert [row['id'] for row in body['list']['data']] == [8]
    assert api.call_args.kwargs['json'] == {'reason': 'Too far'}


def test_vendor_create_service_with_image(vendor_client, api):
    api.return_value = make_response({'data': {'id': 's-1'}}, 201)

    response = vendor_client.post('/api/vendor/services', data={
        'name': ' Deep Cleaning ', 'category_id': 'c-1', 'status': 'true',
        'image': (io.BytesIO(b'\x89PNG'), 'cover.png', 'image/png'),
    }, content_type='multipart/form-data')

    assert response.status_code == 201
    method, url = api.call_args.args
    assert (method, url) == ('POST', 'http://api.test/api/vendor/services')
    kwargs = api.call_args.kwargs
    assert kwargs['data'] == {'name': 'Deep Cleaning', 'category_id': 'c-1', 'status': '1'}
    assert [(field, upload[0]) for field, upload in kwargs['files']] == [('image', 'cover.png')]
    assert 'Content-Type' not in kwargs['headers']


def test_vendor_update_service_posts_with_method_override(vendor_client, api):
    api.return_value = make_response({'data': {'id': 's-1'}})

    vendor_client.put('/api/vendor/services/s-1', json={'description': 'Kitchen and bathrooms', 'status': False})

    method, url = api.call_args.args
    assert (method, url) == ('POST', 'http://api.test/api/vendor/services/s-1')
    assert api.call_args.kwargs['data'] == {'description': 'Kitchen and bathrooms', 'status': '0', '_method': 'PUT'}


def test_vendor_service_requires_name_and_category(vendor_client, api):
    response = vendor_client.post('/api/vendor/services', json={'name': ' '})
    assert response.status_code == 422
    assert set(response.get_json()['errors']) == {'name', 'category_id'}
    api.assert_not_called()


def test_vendor_service_rejects_non_image(vendor_client, api):
    response = vendor_client.post('/api/vendor/services', data={
        'name': 'AC Repair', 'category_id': 'c-2',
        'image': (io.BytesIO(b'%PDF'), 'brochure.pdf', 'application/pdf'),
    }, content_type='multipart/form-data')

    assert response.status_code == 422
    assert response.get_json()['error'] == IMAGE_BAD_TYPE
    api.assert_not_called()


def test_vendor_delete_service_removes_row(vendor_client, api):
    api.return_value = make_response(_page([{'id': 1}, {'id': 2}]))
    vendor_client.get('/api/vendor/services')

    api.return_value = make_response({'message': 'Service deleted'})
    body = vendor_client.delete('/api/vendor/services/2').get_json()

    assert body['removed'] is True
    assert [row['id'] for row in body['list']['data']] == [1]


def test_vendor_sub_service_with_gallery(vendor_client, api):
    api.return_value = make_response({'data': {'id': 'ss-1'}}, 201)

    response = vendor_client.post('/api/vendor/services/s-1/sub-services', data={
        'name': 'Studio', 'price': '150', 'duration': '90',
        'images[]': [(io.BytesIO(b'a'), 'one.jpg', 'image/jpeg'), (io.BytesIO(b'b'), 'two.webp', 'image/webp')],
    }, content_type='multipart/form-data')

    assert response.status_code == 201
    assert api.call_args.args[1] == 'http://api.test/api/vendor/services/s-1/sub-services'
    kwargs = api.call_args.kwargs
    assert kwargs['data'] == {'name': 'Studio', 'price': '150', 'duration': '90'}
    assert [(field, upload[0]) for field, upload in kwargs['files']] == [('images[]', 'one.jpg'), ('images[]', 'two.webp')]


def test_vendor_sub_service_update_can_replace_images(vendor_client, api):
    api.return_value = make_response({'data': {'id': 'ss-1'}})

    vendor_client.put('/api/vendor/services/s-1/sub-services/ss-1', json={'price': '175', 'replace_images': True})

    assert api.call_args.args == ('POST', 'http://api.test/api/vendor/services/s-1/sub-services/ss-1')
    assert api.call_args.kwargs['data'] == {'price': '175', '_method': 'PUT', 'replace_images': '1'}


def test_vendor_sub_service_price_must_be_positive(vendor_client, api):
    response = vendor_client.post('/api/vendor/services/s-1/sub-services',
                                  json={'name': 'Villa', 'price': '0', 'duration': '120'})
    assert response.status_code == 422
    assert response.get_json()['errors'] == {'price': ['Price must be greater than 0']}
    api.assert_not_called()
