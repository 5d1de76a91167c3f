"""
System Logs Component Routes
"""
from flask import Blueprint, jsonify, request

from portal.components import register_component
from portal.core.auth import role_required
from .service import SystemLogsService

system_logs_bp = Blueprint('system_logs', __name__, url_prefix='/api/system')

# Initialize service
service = SystemLogsService()


@system_logs_bp.route('/logs')
@role_required('admin')
def api_logs():
    """Get portal logs with filtering"""
    limit = request.args.get('limit', 50, type=int)
    try:
        logs = service.get_logs(level_filter=request.args.get('level', 'ALL'), limit=limit)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(logs)


@register_component('system_logs')
def init_system_logs(app):
    """Initialize System Logs component with Flask app"""
    app.register_blueprint(system_logs_bp)
    return system_logs_bp
