"""
Customer Service
Orders, refunds, recurring orders, vendors, reviews, payment methods and profile
"""
import logging

from portal.core.api_client import ApiException, current_client
from portal.core.listing import fetch_list, mutate, view_slice
from portal.core.validation import (
    ValidationError,
    clean_text,
    file_size,
    optional_pin,
    validate_address,
    validate_coupon_code,
    validate_image,
    validate_order,
    validate_refund_request,
    validate_review,
)

logger = logging.getLogger(__name__)

RECURRING_STATUS = {'pause': 'paused', 'resume': 'active', 'cancel': 'cancelled'}
ORDER_FIELDS = ('vendor_id', 'address_id', 'payment_method_id', 'payment_type', 'coupon_code',
                'scheduled_date', 'scheduled_time', 'notes')
ADDRESS_FIELDS = ('label', 'street_address', 'building', 'apartment', 'city', 'emirate',
                  'service_area_id', 'is_primary')


class RefundCancelError(ApiException):
    """The refund request was created but cancelling the order failed"""

    def __init__(self, cause, refund):
        super().__init__(cause.message, cause.status, cause.errors)
        self.refund = refund


class CustomerService:
    """Service for the customer component"""

    # Dashboard

    def get_dashboard(self):
        return current_client().get('/customer/dashboard')

    def get_dashboard_stats(self):
        return current_client().get('/customer/dashboard/stats')

    def get_upcoming_services(self):
        return current_client().get('/customer/dashboard/upcoming-services')

    # Orders

    def list_orders(self, query):
        return fetch_list('customer.orders', '/customer/orders', query)

    def get_order(self, order_id):
        return current_client().get(f'/customer/orders/{order_id}')

    def cancel_order(self, order_id, reason=None):
        payload = {'reason': reason} if reason else {}
        return mutate('customer.orders', order_id, f'/customer/orders/{order_id}/cancel',
                      payload=payload, changes={'status': 'cancelled'})

    def create_order(self, data):
        """Book the selected sub-services for a date and time slot

        The cached order list is dropped so the next view shows the new order.
        """
        validate_order(data)
        payload = {key: data[key] for key in ORDER_FIELDS if data.get(key) not in (None, '')}
        if 'coupon_code' in payload:
            payload['coupon_code'] = clean_text(payload['coupon_code'])
        payload['items'] = [
            {'sub_service_id': item['sub_service_id'], 'quantity': int(item.get('quantity', 1))}
            for item in data['items']
        ]
        result = current_client().post('/customer/orders', payload)
        view_slice('customer.orders').clear()
        logger.info(f"Order created with vendor {data['vendor_id']} for {data['scheduled_date']}")
        return result

    def validate_coupon(self, code, subtotal):
        """Ask the API what a coupon is worth against this subtotal"""
        validate_coupon_code(code, subtotal)
        return current_client().post('/customer/orders/validate-coupon',
                                     {'code': clean_text(code), 'subtotal': float(subtotal)})

    # Refunds

    def get_refund_reasons(self):
        return current_client().get('/customer/refund-requests/reasons')

    def list_refund_requests(self, query):
        return fetch_list('customer.refunds', '/customer/refund-requests', query)

    def get_refund_request(self, refund_id):
        return current_client().get(f'/customer/refund-requests/{refund_id}')

    def cancel_refund_request(self, refund_id):
        return mutate('customer.refunds', refund_id, f'/customer/refund-requests/{refund_id}/cancel',
                      changes={'status': 'cancelled'})

    def submit_refund_request(self, order_id, reason, reason_details=None, cancel_order=False):
        """Create a refund request, then optionally cancel the order

        The refund is created first so that the order is still in a refundable
        state. A failing cancel is not compensated: the refund stays and the
        failure is raised as RefundCancelError.
        """
        validate_refund_request(reason)
        client = current_client()

        payload = {'reason': reason}
        if reason_details:
            payload['reason_details'] = reason_details
        refund = client.post(f'/customer/orders/{order_id}/refund-request', payload)
        logger.info(f'Refund request created for order {order_id}')

        if cancel_order:
            try:
                client.post(f'/customer/orders/{order_id}/cancel',
                            {'reason': reason_details} if reason_details else {})
            except ApiException as e:
                logger.error(f'Order {order_id} refund created but cancel failed: {e.message}')
                raise RefundCancelError(e, refund)
            view_slice('customer.orders').update_item(order_id, status='cancelled')

        if cancel_order:
            message = 'Your order has been cancelled and a refund request has been submitted.'
        else:
            message = 'Your refund request has been submitted.'
        return {
            'success': True,
            'message': message,
            'order_cancelled': bool(cancel_order),
            'refund': refund.get('data', refund) if isinstance(refund, dict) else refund,
        }

    # Recurring orders

    def list_recurring_orders(self, query):
        return fetch_list('customer.recurring', '/customer/recurring-orders', query)

    def get_recurring_order(self, recurring_id):
        return current_client().get(f'/customer/recurring-orders/{recurring_id}')

    def get_recurring_stats(self):
        return current_client().get('/customer/recurring-orders/stats')

    def get_recurring_history(self, recurring_id, query):
        return current_client().get_page(f'/customer/recurring-orders/{recurring_id}/orders',
                                         params=query.to_params())

    def set_recurring_state(self, recurring_id, action):
        if action not in RECURRING_STATUS:
            raise ValueError(f'Unknown action: {action}')
        return mutate('customer.recurring', recurring_id,
                      f'/customer/recurring-orders/{recurring_id}/{action}',
                      changes={'status': RECURRING_STATUS[action]})

    # Vendors

    def list_vendors(self, query):
        return fetch_list('customer.vendors', '/customer/vendors', query)

    def get_vendor(self, vendor_id):
        return current_client().get(f'/customer/vendors/{vendor_id}')

    def get_time_slots(self, vendor_id, date):
        return current_client().get(f'/customer/vendors/{vendor_id}/available-time-slots',
                                    params={'date': date})

    def list_favorites(self, query):
        return fetch_list('customer.favorites', '/customer/vendors/favorites', query)

    def set_favorite(self, vendor_id, favorite):
        """Add or remove a favorite; the browse list and favorites list follow locally"""
        endpoint = f'/customer/vendors/{vendor_id}/favorite'
        if favorite:
            result = mutate('customer.vendors', vendor_id, endpoint, changes={'is_favorite': True})
        else:
            result = mutate('customer.vendors', vendor_id, endpoint, method='DELETE',
                            changes={'is_favorite': False})
            view_slice('customer.favorites').remove_item(vendor_id)
        return result

    # Reviews

    def create_review(self, data):
        validate_review(data)
        payload = {
            'order_id': data.get('order_id'),
            'rating': int(data['rating']),
        }
        if data.get('comment'):
            payload['comment'] = data['comment']
        return current_client().post('/customer/reviews', payload)

    def list_reviews(self, query):
        return fetch_list('customer.reviews', '/customer/reviews', query)

    # Addresses

    def list_addresses(self, query):
        return fetch_list('customer.addresses', '/customer/addresses', query)

    def get_address(self, address_id):
        return current_client().get(f'/customer/addresses/{address_id}')

    @staticmethod
    def _address_payload(data):
        payload = {key: data[key] for key in ADDRESS_FIELDS if key in data}
        for key in ('street_address', 'building', 'apartment', 'city', 'emirate'):
            if key in payload:
                payload[key] = clean_text(payload[key])
        payload.update(optional_pin(data))
        return payload

    def create_address(self, data):
        validate_address(data)
        result = current_client().post('/customer/addresses', self._address_payload(data))
        view_slice('customer.addresses').clear()
        return result

    def update_address(self, address_id, data):
        validate_address(data, partial=True)
        result = current_client().put(f'/customer/addresses/{address_id}', self._address_payload(data))
        view_slice('customer.addresses').clear()
        return result

    def delete_address(self, address_id):
        return mutate('customer.addresses', address_id, f'/customer/addresses/{address_id}',
                      method='DELETE', remove=True)

    def set_primary_address(self, address_id):
        """Only one address is primary; the other cached rows are unflagged"""
        result = mutate('customer.addresses', address_id, f'/customer/addresses/{address_id}/primary',
                        changes={'is_primary': True})
        page = view_slice('customer.addresses').get()
        if page is not None:
            for address in page.data:
                if str(address.get('id')) != str(address_id):
                    address['is_primary'] = False
            result['list'] = page.to_dict()
        return result

    # Payment methods

    def list_payment_methods(self):
        return current_client().get('/customer/payment-methods')

    def create_setup_intent(self):
        """Client secret for collecting a card in the browser"""
        return current_client().post('/customer/payment-methods/setup-intent')

    def attach_payment_method(self, payment_method_id):
        if not payment_method_id:
            raise ValidationError({'payment_method_id': ['Payment method is required']})
        return current_client().post('/customer/payment-methods', {'payment_method_id': payment_method_id})

    def set_default_payment_method(self, method_id):
        return current_client().post(f'/customer/payment-methods/{method_id}/default')

    def delete_payment_method(self, method_id):
        return current_client().delete(f'/customer/payment-methods/{method_id}')

    # Profile

    def get_profile(self):
        return current_client().get('/customer/profile')

    def update_profile(self, data):
        allowed = ('first_name', 'last_name', 'phone', 'nationality')
        payload = {key: data[key] for key in allowed if key in data}
        return current_client().put('/customer/profile', payload)

    def upload_emirates_id(self, front=None, back=None):
        """Validate both sides locally, then forward them as multipart"""
        files = {}
        for field, storage in (('emirates_id_front', front), ('emirates_id_back', back)):
            if storage is None or not storage.filename:
                continue
            validate_image(file_size(storage), storage.mimetype)
            files[field] = (storage.filename, storage.stream, storage.mimetype)

        if not files:
            raise ValidationError({'image': ['Please select an image to upload']})
        return current_client().upload('/customer/profile/emirates-id', files)
