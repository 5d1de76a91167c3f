"""
Uniform error responses for API-backed routes
"""
import logging
from functools import wraps

from flask import jsonify, request

from .api_client import ApiException
from .validation import ValidationError

logger = logging.getLogger(__name__)


def error_payload(message, status, errors=None):
    """Banner payload: message, field errors and the URL that retries the request"""
    return {
        'error': message,
        'errors': errors or {},
        'retry': request.full_path.rstrip('?') if request.method == 'GET' else None,
    }, status


def error_status(e):
    """HTTP status the portal answers with for a failed call"""
    if isinstance(e, ValidationError):
        return 422
    if 400 <= e.status < 500 or e.status == 503:
        return e.status
    return 502


def api_error_response(e):
    payload, status = error_payload(e.message, error_status(e), e.errors)
    return jsonify(payload), status


def api_route(view):
    """Turn ApiException/ValidationError raised by a view into the error banner JSON"""
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return api_error_response(e)
        except ApiException as e:
            logger.error(f'[{request.endpoint}] {e.message} (HTTP {e.status})')
            return api_error_response(e)
    return wrapper
