"""
Customer API Routes
"""
import logging

from flask import Blueprint, jsonify, request

from portal.components import register_component
from portal.core.auth import role_required
from portal.core.errors import api_route, error_payload
from portal.core.pagination import ListQuery
from .service import CustomerService, RefundCancelError

logger = logging.getLogger(__name__)

customer_bp = Blueprint('customer', __name__, url_prefix='/api/customer')

# Service instance
service = CustomerService()


def _payload():
    return request.get_json(silent=True) or request.form.to_dict()


def _flag(value):
    return str(value).lower() in ('1', 'true', 'yes', 'on')


@customer_bp.before_request
@role_required('customer')
def require_customer():
    return None


@customer_bp.route('/dashboard')
@api_route
def api_dashboard():
    return jsonify(service.get_dashboard())


@customer_bp.route('/dashboard/stats')
@api_route
def api_dashboard_stats():
    return jsonify(service.get_dashboard_stats())


@customer_bp.route('/dashboard/upcoming')
@api_route
def api_upcoming_services():
    return jsonify(service.get_upcoming_services())


# Orders

@customer_bp.route('/orders', methods=['GET', 'POST'])
@api_route
def api_orders():
    if request.method == 'POST':
        return jsonify(service.create_order(_payload())), 201
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_orders(query).to_dict())


@customer_bp.route('/orders/validate-coupon', methods=['POST'])
@api_route
def api_validate_coupon():
    data = _payload()
    return jsonify(service.validate_coupon(data.get('code'), data.get('subtotal')))


@customer_bp.route('/orders/<order_id>')
@api_route
def api_order(order_id):
    return jsonify(service.get_order(order_id))


@customer_bp.route('/orders/<order_id>/cancel', methods=['POST'])
@api_route
def api_order_cancel(order_id):
    return jsonify(service.cancel_order(order_id, _payload().get('reason')))


@customer_bp.route('/orders/<order_id>/refund-request', methods=['POST'])
@api_route
def api_order_refund(order_id):
    """Refund request, optionally followed by cancelling the order"""
    data = _payload()
    try:
        result = service.submit_refund_request(
            order_id,
            data.get('reason'),
            reason_details=data.get('reason_details'),
            cancel_order=_flag(data.get('cancel_order', False)),
        )
    except RefundCancelError as e:
        logger.warning(f'Order {order_id}: refund request created, cancel failed')
        payload, _ = error_payload(e.message or 'Failed to cancel order and submit refund request', 502, e.errors)
        payload['refund_created'] = True
        payload['success'] = False
        status = e.status if 400 <= e.status < 500 else 502
        return jsonify(payload), status
    return jsonify(result), 201


# Refund requests

@customer_bp.route('/refund-requests/reasons')
@api_route
def api_refund_reasons():
    return jsonify(service.get_refund_reasons())


@customer_bp.route('/refund-requests')
@api_route
def api_refund_requests():
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_refund_requests(query).to_dict())


@customer_bp.route('/refund-requests/<refund_id>')
@api_route
def api_refund_request(refund_id):
    return jsonify(service.get_refund_request(refund_id))


@customer_bp.route('/refund-requests/<refund_id>/cancel', methods=['POST'])
@api_route
def api_refund_request_cancel(refund_id):
    return jsonify(service.cancel_refund_request(refund_id))


# Recurring orders

@customer_bp.route('/recurring-orders')
@api_route
def api_recurring_orders():
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_recurring_orders(query).to_dict())


@customer_bp.route('/recurring-orders/stats')
@api_route
def api_recurring_stats():
    return jsonify(service.get_recurring_stats())


@customer_bp.route('/recurring-orders/<recurring_id>')
@api_route
def api_recurring_order(recurring_id):
    return jsonify(service.get_recurring_order(recurring_id))


@customer_bp.route('/recurring-orders/<recurring_id>/orders')
@api_route
def api_recurring_history(recurring_id):
    query = ListQuery.from_args(request.args)
    return jsonify(service.get_recurring_history(recurring_id, query).to_dict())


@customer_bp.route('/recurring-orders/<recurring_id>/<any(pause, resume, cancel):action>', methods=['POST'])
@api_route
def api_recurring_action(recurring_id, action):
    return jsonify(service.set_recurring_state(recurring_id, action))


# Vendors

@customer_bp.route('/vendors')
@api_route
def api_vendors():
    query = ListQuery.from_args(request.args, filter_names=('category_id', 'service_area_id'))
    return jsonify(service.list_vendors(query).to_dict())


@customer_bp.route('/vendors/favorites')
@api_route
def api_favorite_vendors():
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_favorites(query).to_dict())


@customer_bp.route('/vendors/<vendor_id>')
@api_route
def api_vendor(vendor_id):
    return jsonify(service.get_vendor(vendor_id))


@customer_bp.route('/vendors/<vendor_id>/time-slots')
@api_route
def api_vendor_time_slots(vendor_id):
    return jsonify(service.get_time_slots(vendor_id, request.args.get('date')))


@customer_bp.route('/vendors/<vendor_id>/favorite', methods=['POST', 'DELETE'])
@api_route
def api_vendor_favorite(vendor_id):
    return jsonify(service.set_favorite(vendor_id, favorite=request.method == 'POST'))


# Reviews

@customer_bp.route('/reviews', methods=['GET', 'POST'])
@api_route
def api_reviews():
    if request.method == 'POST':
        return jsonify(service.create_review(_payload())), 201
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_reviews(query).to_dict())


# Addresses

@customer_bp.route('/addresses', methods=['GET', 'POST'])
@api_route
def api_addresses():
    if request.method == 'POST':
        return jsonify(service.create_address(_payload())), 201
    query = ListQuery.from_args(request.args)
    return jsonify(service.list_addresses(query).to_dict())


@customer_bp.route('/addresses/<address_id>', methods=['GET', 'PUT', 'DELETE'])
@api_route
def api_address(address_id):
    if request.method == 'PUT':
        return jsonify(service.update_address(address_id, _payload()))
    if request.method == 'DELETE':
        return jsonify(service.delete_address(address_id))
    return jsonify(service.get_address(address_id))


@customer_bp.route('/addresses/<address_id>/primary', methods=['POST'])
@api_route
def api_address_primary(address_id):
    return jsonify(service.set_primary_address(address_id))


# Payment methods

@customer_bp.route('/payment-methods', methods=['GET', 'POST'])
@api_route
def api_payment_methods():
    if request.method == 'POST':
        return jsonify(service.attach_payment_method(_payload().get('payment_method_id'))), 201
    return jsonify(service.list_payment_methods())


@customer_bp.route('/payment-methods/setup-intent', methods=['POST'])
@api_route
def api_setup_intent():
    return jsonify(service.create_setup_intent())


@customer_bp.route('/payment-methods/<method_id>/default', methods=['POST'])
@api_route
def api_payment_method_default(method_id):
    return jsonify(service.set_default_payment_method(method_id))


@customer_bp.route('/payment-methods/<method_id>', methods=['DELETE'])
@api_route
def api_payment_method_delete(method_id):
    return jsonify(service.delete_payment_method(method_id))


# Profile

@customer_bp.route('/profile', methods=['GET', 'PUT'])
@api_route
def api_profile():
    if request.method == 'PUT':
        return jsonify(service.update_profile(_payload()))
    return jsonify(service.get_profile())


@customer_bp.route('/profile/emirates-id', methods=['POST'])
@api_route
def api_profile_emirates_id():
    return jsonify(service.upload_emirates_id(
        front=request.files.get('emirates_id_front'),
        back=request.files.get('emirates_id_back'),
    ))


@register_component('customer')
def init_customer(app):
    """Initialize customer component with Flask app"""
    app.register_blueprint(customer_bp)
    return customer_bp
