"""
Notifications API Routes
"""
from flask import Blueprint, current_app, jsonify, request

from portal.components import register_component
from portal.core.api_client import current_client
from portal.core.auth import login_required
from portal.core.errors import api_route
from portal.core.sse import PollingStream
from .service import NotificationsService, unread_state

notifications_bp = Blueprint('notifications', __name__, url_prefix='/api/notifications')

# Service instance
service = NotificationsService()


@notifications_bp.before_request
@login_required
def require_login():
    return None


@notifications_bp.route('')
@api_route
def api_unread():
    limit = request.args.get('limit', current_app.config['NOTIFICATION_LIMIT'], type=int)
    return jsonify(service.unread(limit))


@notifications_bp.route('/all')
@api_route
def api_all():
    return jsonify(service.list_all(request.args.get('limit', 50, type=int)))


@notifications_bp.route('/unread-count')
@api_route
def api_unread_count():
    return jsonify(service.unread_count())


@notifications_bp.route('/<notification_id>/read', methods=['POST'])
@api_route
def api_mark_read(notification_id):
    return jsonify(service.mark_read(notification_id))


@notifications_bp.route('/mark-all-read', methods=['POST'])
@api_route
def api_mark_all_read():
    return jsonify(service.mark_all_read())


@notifications_bp.route('/stream')
def api_unread_stream():
    """SSE endpoint for the unread badge"""
    client = current_client()
    config = current_app.config
    stream = PollingStream(
        interval=config['POLLING_INTERVALS']['notifications'] / 1000.0,
        heartbeat=config['POLLING_INTERVALS']['sse_heartbeat'] / 1000.0,
    )
    return stream.response(lambda: service.unread_count(client=client), extract=unread_state)


@register_component('notifications')
def init_notifications(app):
    """Initialize notifications component with Flask app"""
    app.register_blueprint(notifications_bp)
    return notifications_bp
