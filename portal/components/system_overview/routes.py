"""
System Overview Routes
"""
from flask import Blueprint, current_app, jsonify

from portal.components import register_component
from portal.core.auth import role_required
from .service import SystemOverviewService

system_overview_bp = Blueprint('system_overview', __name__, url_prefix='/api/system')


def _service():
    return SystemOverviewService(current_app.extensions.get('upstream_monitor'))


@system_overview_bp.route('/status')
@role_required('admin')
def api_system_status():
    """Remote API status as seen by the portal"""
    return jsonify(_service().get_status())


@system_overview_bp.route('/status/check', methods=['POST'])
@role_required('admin')
def api_system_check():
    return jsonify(_service().check_now())


@register_component('system_overview')
def init_system_overview(app):
    """Initialize system overview component with Flask app"""
    app.register_blueprint(system_overview_bp)
    return system_overview_bp
