import logging
from unittest.mock import patch

import requests

from portal.core import portal_logs, upstream_status
from portal.core.logs import filter_logs
from portal.core.monitoring import UpstreamMonitor
from tests.conftest import make_response


def test_portal_logs_reach_the_ring_buffer(app):
    logging.getLogger('portal.tests').error('Something broke')
    assert portal_logs[-1]['level'] == 'ERROR'
    assert portal_logs[-1]['message'] == 'Something broke'


def test_filter_logs():
    entries = [{'level': 'INFO', 'message': str(i)} for i in range(5)] + [{'level': 'ERROR', 'message': 'e'}]
    assert filter_logs(entries, 'ERROR') == [{'level': 'ERROR', 'message': 'e'}]
    assert [e['message'] for e in filter_logs(entries, 'ALL', limit=2)] == ['4', 'e']


def test_logs_endpoint(admin_client):
    logging.getLogger('portal.tests').warning('Careful')
    response = admin_client.get('/api/system/logs?level=warning')
    assert response.status_code == 200
    assert response.get_json()[-1]['message'] == 'Careful'

    assert admin_client.get('/api/system/logs?level=LOUD').status_code == 400


def test_logs_endpoint_admin_only(vendor_client):
    assert vendor_client.get('/api/system/logs').status_code == 403


def test_monitor_states():
    status = {}
    monitor = UpstreamMonitor('http://api.test/api/health', status_map=status)

    with patch('portal.core.monitoring.requests.get', return_value=make_response({}, 200)):
        monitor.check()
    assert status['api']['status'] == 'healthy'

    with patch('portal.core.monitoring.requests.get', return_value=make_response({}, 500)):
        monitor.check()
    assert status['api']['status'] == 'unhealthy'

    with patch('portal.core.monitoring.requests.get',
               side_effect=requests.exceptions.ConnectionError('refused')):
        monitor.check()
    assert status['api']['status'] == 'down'
    assert monitor.snapshot()['url'] == 'http://api.test/api/health'


def test_status_endpoint(admin_client):
    with patch('portal.core.monitoring.requests.get', return_value=make_response({}, 200)):
        response = admin_client.post('/api/system/status/check')
    body = response.get_json()
    assert body['api']['status'] == 'healthy'
    assert 'active_sessions' in body
    upstream_status.clear()
