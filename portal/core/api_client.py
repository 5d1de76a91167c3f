"""
Thin client for the marketplace REST API
Forwards the bearer token and JSON bodies, turns error bodies into ApiException
"""
import logging

import requests
from flask import current_app, session

from .pagination import Page

logger = logging.getLogger(__name__)


class ApiException(Exception):
    """Error returned by the remote API (or raised when it cannot be reached)"""

    def __init__(self, message, status=500, errors=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.errors = errors or {}

    def to_dict(self):
        return {'error': self.message, 'errors': self.errors, 'status': self.status}


class ApiClient:
    """HTTP client bound to one API base URL and (optionally) one bearer token"""

    def __init__(self, base_url, token=None, timeout=10, session=None):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self, json_body=True):
        headers = {'Accept': 'application/json'}
        if json_body:
            headers['Content-Type'] = 'application/json'
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def request(self, method, endpoint, data=None, params=None, files=None):
        """Send a request and return the decoded JSON body"""
        url = f'{self.base_url}/{endpoint.lstrip("/")}'
        kwargs = {
            'headers': self._headers(json_body=files is None),
            'params': params or None,
            'timeout': self.timeout,
        }
        if files is not None:
            kwargs['files'] = files
            kwargs['data'] = data or {}
        elif data is not None:
            kwargs['json'] = data

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f'[API] {method} {url} failed: {e}')
            raise ApiException('Backend not available', 503) from e

        return self._handle_response(method, url, response)

    def _handle_response(self, method, url, response):
        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            message = 'An error occurred'
            errors = None
            if isinstance(body, dict):
                message = body.get('message') or message
                errors = body.get('errors')
            logger.warning(f'[API] {method} {url} -> HTTP {response.status_code}: {message}')
            raise ApiException(message, response.status_code, errors)

        return body

    def get(self, endpoint, params=None):
        return self.request('GET', endpoint, params=params)

    def post(self, endpoint, data=None):
        return self.request('POST', endpoint, data=data if data is not None else {})

    def put(self, endpoint, data=None):
        return self.request('PUT', endpoint, data=data if data is not None else {})

    def patch(self, endpoint, data=None):
        return self.request('PATCH', endpoint, data=data if data is not None else {})

    def delete(self, endpoint):
        return self.request('DELETE', endpoint)

    def upload(self, endpoint, files, data=None):
        """Multipart POST used for image uploads"""
        return self.request('POST', endpoint, data=data, files=files)

    def get_page(self, endpoint, params=None):
        """GET a paginated list and parse the {data, meta} envelope"""
        return Page.from_envelope(self.get(endpoint, params=params))


def current_client():
    """Build a client for the current request using the session token"""
    return ApiClient(
        current_app.config['API_BASE_URL'],
        token=session.get('token'),
        timeout=current_app.config.get('API_TIMEOUT', 10),
    )
