"""
Technician API Routes
"""
from flask import Blueprint, jsonify, request

from portal.components import register_component
from portal.core.auth import role_required
from portal.core.errors import api_route
from portal.core.pagination import ListQuery
from .service import TechnicianService

technician_bp = Blueprint('technician', __name__, url_prefix='/api/technician')

# Service instance
service = TechnicianService()


def _payload():
    return request.get_json(silent=True) or request.form.to_dict()


@technician_bp.before_request
@role_required('technician')
def require_technician():
    return None


@technician_bp.route('/jobs')
@api_route
def api_jobs():
    query = ListQuery.from_args(request.args, filter_names=('date',))
    return jsonify(service.list_jobs(query).to_dict())


@technician_bp.route('/jobs/stats')
@api_route
def api_job_stats():
    return jsonify(service.get_job_stats())


@technician_bp.route('/jobs/history/stats')
@api_route
def api_history_stats():
    return jsonify(service.get_history_stats())


@technician_bp.route('/jobs/<job_id>')
@api_route
def api_job(job_id):
    return jsonify(service.get_job(job_id))


@technician_bp.route(
    '/jobs/<job_id>/<any(acknowledge, "on-the-way", arrived, start, complete):action>',
    methods=['POST'])
@api_route
def api_job_action(job_id, action):
    return jsonify(service.job_action(job_id, action, _payload().get('notes')))


@technician_bp.route('/jobs/<job_id>/decline', methods=['POST'])
@api_route
def api_job_decline(job_id):
    return jsonify(service.decline_job(job_id, _payload().get('reason')))


@technician_bp.route('/jobs/<job_id>/notes', methods=['POST'])
@api_route
def api_job_note(job_id):
    return jsonify(service.add_job_note(job_id, _payload().get('note'))), 201


@technician_bp.route('/availability')
@api_route
def api_availability():
    return jsonify(service.get_availability())


@register_component('technician')
def init_technician(app):
    """Initialize technician component with Flask app"""
    app.register_blueprint(technician_bp)
    return technician_bp
