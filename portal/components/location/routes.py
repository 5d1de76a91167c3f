"""
Location API Routes
"""
from flask import Blueprint, current_app, jsonify, request

from portal.components import register_component
from portal.core.auth import login_required, session_id
from portal.core.debounce import app_debouncer
from portal.core.errors import api_route
from .service import LocationService

location_bp = Blueprint('location', __name__, url_prefix='/api/location')


def _service():
    config = current_app.config
    return LocationService(config['NOMINATIM_URL'], config['NOMINATIM_USER_AGENT'])


@location_bp.before_request
@login_required
def require_login():
    return None


@location_bp.route('/search')
@api_route
def api_search():
    """Query-as-you-type place search, debounced per session"""
    query = request.args.get('q', '')
    if not query.strip():
        return jsonify({'results': []})

    debouncer = app_debouncer('location.search', current_app.config['LOCATION_DEBOUNCE_MS'])
    result = debouncer.call(session_id(), _service().search, query)
    if not result.fired:
        return jsonify({'superseded': True, 'results': []})
    return jsonify({'results': result.value})


@location_bp.route('/validate', methods=['POST'])
@api_route
def api_validate():
    data = request.get_json(silent=True) or request.form
    return jsonify(LocationService.pin(data.get('latitude'), data.get('longitude')))


@register_component('location')
def init_location(app):
    """Initialize location component with Flask app"""
    app.register_blueprint(location_bp)
    return location_bp
