"""
Admin API Routes
"""
from flask import Blueprint, current_app, jsonify, request

from portal.components import register_component
from portal.core.auth import role_required, session_id
from portal.core.debounce import app_debouncer
from portal.core.errors import api_route
from portal.core.pagination import ListQuery
from .service import AdminService

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')

# Service instance
service = AdminService()


def _payload():
    return request.get_json(silent=True) or request.form.to_dict()


@admin_bp.before_request
@role_required('admin')
def require_admin():
    """Every admin endpoint is restricted to admins"""
    return None


# Dashboard

@admin_bp.route('/dashboard')
@api_route
def api_dashboard():
    period = request.args.get('period', 'month')
    return jsonify(service.get_dashboard(period))


@admin_bp.route('/dashboard/stats')
@api_route
def api_dashboard_stats():
    return jsonify(service.get_dashboard_stats(request.args.get('period', 'month')))


# Customers

@admin_bp.route('/customers')
@api_route
def api_customers():
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_customers(query).to_dict())


@admin_bp.route('/customers/search')
@api_route
def api_customers_search():
    """Search-as-you-type: only the last keystroke of a burst reaches the API"""
    query = ListQuery.from_args(request.args)
    debouncer = app_debouncer('admin.customers.search', current_app.config['SEARCH_DEBOUNCE_MS'])
    result = debouncer.call(session_id(), service.list_customers, query)
    if not result.fired:
        return jsonify({'superseded': True})
    return jsonify(result.value.to_dict())


@admin_bp.route('/customers/<customer_id>')
@api_route
def api_customer(customer_id):
    return jsonify(service.get_customer(customer_id))


@admin_bp.route('/customers/<customer_id>/<any(suspend, unsuspend):action>', methods=['POST'])
@api_route
def api_customer_suspension(customer_id, action):
    return jsonify(service.set_customer_suspension(customer_id, action))


# Technicians

@admin_bp.route('/technicians')
@api_route
def api_technicians():
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_technicians(query).to_dict())


@admin_bp.route('/technicians/<technician_id>')
@api_route
def api_technician(technician_id):
    return jsonify(service.get_technician(technician_id))


@admin_bp.route('/technicians/<technician_id>/<any(suspend, unsuspend):action>', methods=['POST'])
@api_route
def api_technician_suspension(technician_id, action):
    return jsonify(service.set_technician_suspension(technician_id, action))


# Vendors

@admin_bp.route('/vendors')
@api_route
def api_vendors():
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_vendors(query).to_dict())


@admin_bp.route('/vendors/applications')
@api_route
def api_vendor_applications():
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_applications(query).to_dict())


@admin_bp.route('/vendors/<company_id>')
@api_route
def api_vendor(company_id):
    return jsonify(service.get_vendor(company_id))


@admin_bp.route('/vendors/<company_id>/approve', methods=['POST'])
@api_route
def api_vendor_approve(company_id):
    return jsonify(service.approve_vendor(company_id))


@admin_bp.route('/vendors/<company_id>/reject', methods=['POST'])
@api_route
def api_vendor_reject(company_id):
    return jsonify(service.reject_vendor(company_id, _payload().get('reason')))


# Payouts

@admin_bp.route('/payouts')
@api_route
def api_payouts():
    query = ListQuery.from_args(request.args, filter_names=('company_id',))
    return jsonify(service.list_payouts(query).to_dict())


@admin_bp.route('/payouts/stats')
@api_route
def api_payout_stats():
    return jsonify(service.get_payout_stats())


@admin_bp.route('/payouts/<payout_id>')
@api_route
def api_payout(payout_id):
    return jsonify(service.get_payout(payout_id))


@admin_bp.route('/payouts/<payout_id>/approve', methods=['POST'])
@api_route
def api_payout_approve(payout_id):
    data = _payload()
    return jsonify(service.approve_payout(payout_id, data.get('approved_amount'), data.get('admin_notes')))


@admin_bp.route('/payouts/<payout_id>/mark-paid', methods=['POST'])
@api_route
def api_payout_mark_paid(payout_id):
    data = _payload()
    return jsonify(service.mark_payout_paid(payout_id, data.get('payment_reference'), data.get('payment_notes')))


@admin_bp.route('/payouts/<payout_id>/cancel', methods=['POST'])
@api_route
def api_payout_cancel(payout_id):
    return jsonify(service.cancel_payout(payout_id, _payload().get('admin_notes')))


# Adjustments and payout runs

@admin_bp.route('/adjustments', methods=['GET', 'POST'])
@api_route
def api_adjustments():
    if request.method == 'POST':
        return jsonify(service.create_adjustment(_payload())), 201
    query = ListQuery.from_args(
        request.args, filter_names=('type', 'company_id', 'from_date', 'to_date'))
    return jsonify(service.list_adjustments(query).to_dict())


@admin_bp.route('/adjustments/<adjustment_id>/<any(apply, reverse):action>', methods=['POST'])
@api_route
def api_adjustment_action(adjustment_id, action):
    return jsonify(service.set_adjustment_state(adjustment_id, action))


@admin_bp.route('/transactions/companies')
@api_route
def api_transaction_companies():
    return jsonify(service.list_transaction_companies())


@admin_bp.route('/payout-runs')
@api_route
def api_payout_runs():
    query = ListQuery.from_args(request.args, filter_names=('from_date', 'to_date'))
    return jsonify(service.list_payout_runs(query).to_dict())


@admin_bp.route('/payout-runs/<run_id>')
@api_route
def api_payout_run(run_id):
    return jsonify(service.get_payout_run(run_id))


# Refund disputes

@admin_bp.route('/disputes')
@api_route
def api_disputes():
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_disputes(query).to_dict())


@admin_bp.route('/disputes/<dispute_id>')
@api_route
def api_dispute(dispute_id):
    return jsonify(service.get_dispute(dispute_id))


@admin_bp.route('/disputes/<dispute_id>/<any(approve, reject, complete):action>', methods=['POST'])
@api_route
def api_dispute_action(dispute_id, action):
    return jsonify(service.resolve_dispute(dispute_id, action, _payload()))


@register_component('admin')
def init_admin(app):
    """Initialize admin component with Flask app"""
    app.register_blueprint(admin_bp)
    return admin_bp
