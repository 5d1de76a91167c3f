"""
Messaging API Routes
"""
from flask import Blueprint, current_app, jsonify, request

from portal.components import register_component
from portal.core.api_client import current_client
from portal.core.auth import login_required
from portal.core.errors import api_route
from portal.core.sse import PollingStream
from .service import MessagingService, conversation_state

messaging_bp = Blueprint('messaging', __name__, url_prefix='/api/messages')

# Service instance
service = MessagingService()


@messaging_bp.before_request
@login_required
def require_login():
    return None


@messaging_bp.route('/conversations')
@api_route
def api_conversations():
    page = request.args.get('page', 1, type=int)
    return jsonify(service.list_conversations(max(page, 1)).to_dict())


@messaging_bp.route('/conversations/start/<user_id>', methods=['POST'])
@api_route
def api_start_conversation(user_id):
    return jsonify(service.start_conversation(user_id))


@messaging_bp.route('/conversations/<conversation_id>')
@api_route
def api_conversation(conversation_id):
    return jsonify(service.get_conversation(conversation_id))


@messaging_bp.route('/conversations/<conversation_id>/messages', methods=['POST'])
@api_route
def api_send_message(conversation_id):
    data = request.get_json(silent=True) or request.form
    return jsonify(service.send_message(conversation_id, data.get('message'))), 201


@messaging_bp.route('/conversations/<conversation_id>/mark-read', methods=['POST'])
@api_route
def api_mark_read(conversation_id):
    return jsonify(service.mark_read(conversation_id))


@messaging_bp.route('/conversations/<conversation_id>/stream')
def api_conversation_stream(conversation_id):
    """SSE endpoint re-fetching the open conversation on a fixed interval"""
    # The generator outlives the request context, so bind the client now
    client = current_client()
    config = current_app.config
    stream = PollingStream(
        interval=config['POLLING_INTERVALS']['messages'] / 1000.0,
        heartbeat=config['POLLING_INTERVALS']['sse_heartbeat'] / 1000.0,
    )
    return stream.response(
        lambda: service.get_conversation(conversation_id, client=client),
        extract=conversation_state,
    )


@messaging_bp.route('/unread-count')
@api_route
def api_unread_count():
    return jsonify(service.unread_count())


@messaging_bp.route('/users/search')
@api_route
def api_search_users():
    return jsonify(service.search_users(request.args.get('search', '').strip()))


@register_component('messaging')
def init_messaging(app):
    """Initialize messaging component with Flask app"""
    app.register_blueprint(messaging_bp)
    return messaging_bp
