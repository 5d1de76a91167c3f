"""
Admin Service
Customers, technicians, vendors, payouts, adjustments and refund disputes
"""
import logging

from portal.core.api_client import current_client
from portal.core.listing import fetch_list, mutate
from portal.core.validation import ValidationError, clean_text, validate_adjustment, validate_reason

logger = logging.getLogger(__name__)

SUSPENSION_STATUS = {'suspend': 'suspended', 'unsuspend': 'active'}
PAYOUT_STATUS = {'approve': 'processing', 'mark-paid': 'paid', 'cancel': 'cancelled'}
ADJUSTMENT_STATUS = {'apply': 'applied', 'reverse': 'reversed'}
DISPUTE_STATUS = {'approve': 'approved', 'reject': 'rejected', 'complete': 'completed'}


class AdminService:
    """Service for the admin component"""

    # Dashboard

    def get_dashboard(self, period='month'):
        return current_client().get('/admin/dashboard', params={'period': period})

    def get_dashboard_stats(self, period='month'):
        return current_client().get('/admin/dashboard/stats', params={'period': period})

    # Customers

    def list_customers(self, query):
        return fetch_list('admin.customers', '/admin/customers', query)

    def get_customer(self, customer_id):
        return current_client().get(f'/admin/customers/{customer_id}')

    def set_customer_suspension(self, customer_id, action):
        """Suspend or unsuspend a customer, flipping the cached row's badge"""
        if action not in SUSPENSION_STATUS:
            raise ValueError(f'Unknown action: {action}')
        result = mutate(
            'admin.customers', customer_id,
            f'/admin/customers/{customer_id}/{action}',
            changes={'status': SUSPENSION_STATUS[action]},
        )
        logger.info(f'Customer {customer_id} {action}ed')
        return result

    # Technicians

    def list_technicians(self, query):
        return fetch_list('admin.technicians', '/admin/technicians', query)

    def get_technician(self, technician_id):
        return current_client().get(f'/admin/technicians/{technician_id}')

    def set_technician_suspension(self, technician_id, action):
        if action not in SUSPENSION_STATUS:
            raise ValueError(f'Unknown action: {action}')
        result = mutate(
            'admin.technicians', technician_id,
            f'/admin/technicians/{technician_id}/{action}',
            changes={'status': SUSPENSION_STATUS[action]},
        )
        logger.info(f'Technician {technician_id} {action}ed')
        return result

    # Vendors (companies)

    def list_vendors(self, query):
        return fetch_list('admin.vendors', '/admin/companies/approved', query)

    def list_applications(self, query):
        return fetch_list('admin.applications', '/admin/companies/pending', query)

    def get_vendor(self, company_id):
        return current_client().get(f'/admin/companies/{company_id}')

    def approve_vendor(self, company_id):
        """Approve an application; it leaves the pending list"""
        result = mutate(
            'admin.applications', company_id,
            f'/admin/companies/{company_id}/approve',
            remove=True,
        )
        logger.info(f'Vendor application {company_id} approved')
        return result

    def reject_vendor(self, company_id, reason):
        validate_reason(reason, message='Please provide a reason for rejection')
        result = mutate(
            'admin.applications', company_id,
            f'/admin/companies/{company_id}/reject',
            payload={'reason': clean_text(reason)},
            remove=True,
        )
        logger.info(f'Vendor application {company_id} rejected')
        return result

    # Payouts

    def list_payouts(self, query):
        return fetch_list('admin.payouts', '/admin/payouts', query)

    def get_payout_stats(self):
        return current_client().get('/admin/payouts/stats')

    def get_payout(self, payout_id):
        return current_client().get(f'/admin/payouts/{payout_id}')

    def approve_payout(self, payout_id, approved_amount=None, admin_notes=None):
        payload = {}
        if approved_amount not in (None, ''):
            try:
                payload['approved_amount'] = float(approved_amount)
            except (TypeError, ValueError):
                raise ValidationError({'approved_amount': ['Approved amount must be a number']})
            if payload['approved_amount'] <= 0:
                raise ValidationError({'approved_amount': ['Approved amount must be greater than 0']})
        if admin_notes:
            payload['admin_notes'] = admin_notes
        changes = {'status': PAYOUT_STATUS['approve']}
        if 'approved_amount' in payload:
            changes['approved_amount'] = payload['approved_amount']
        return mutate('admin.payouts', payout_id, f'/admin/payouts/{payout_id}/approve',
                      payload=payload, changes=changes)

    def mark_payout_paid(self, payout_id, payment_reference=None, payment_notes=None):
        payload = {k: v for k, v in (('payment_reference', payment_reference),
                                     ('payment_notes', payment_notes)) if v}
        return mutate('admin.payouts', payout_id, f'/admin/payouts/{payout_id}/mark-paid',
                      payload=payload, changes={'status': PAYOUT_STATUS['mark-paid']})

    def cancel_payout(self, payout_id, admin_notes=None):
        payload = {'admin_notes': admin_notes} if admin_notes else {}
        return mutate('admin.payouts', payout_id, f'/admin/payouts/{payout_id}/cancel',
                      payload=payload, changes={'status': PAYOUT_STATUS['cancel']})

    # Adjustments and payout runs

    def list_adjustments(self, query):
        return fetch_list('admin.adjustments', '/admin/transactions/adjustments', query)

    def create_adjustment(self, data):
        validate_adjustment(data)
        payload = {
            'vendor_id': data['vendor_id'],
            'type': data['type'],
            'amount': float(data['amount']),
            'reason': clean_text(data['reason']),
        }
        for optional in ('order_id', 'description'):
            if data.get(optional):
                payload[optional] = data[optional]
        result = current_client().post('/admin/transactions/adjustments', payload)
        logger.info(f"Adjustment created: {payload['type']} {payload['amount']} for vendor {payload['vendor_id']}")
        return result

    def set_adjustment_state(self, adjustment_id, action):
        if action not in ADJUSTMENT_STATUS:
            raise ValueError(f'Unknown action: {action}')
        return mutate('admin.adjustments', adjustment_id,
                      f'/admin/transactions/adjustments/{adjustment_id}/{action}',
                      changes={'status': ADJUSTMENT_STATUS[action]})

    def list_transaction_companies(self):
        return current_client().get('/admin/transactions/companies')

    def list_payout_runs(self, query):
        return fetch_list('admin.payout_runs', '/admin/transactions/payout-runs', query)

    def get_payout_run(self, run_id):
        return current_client().get(f'/admin/transactions/payout-runs/{run_id}')

    # Refund disputes

    def list_disputes(self, query):
        return fetch_list('admin.disputes', '/admin/disputes', query)

    def get_dispute(self, dispute_id):
        return current_client().get(f'/admin/disputes/{dispute_id}')

    def resolve_dispute(self, dispute_id, action, data):
        """Approve (refund %), reject (reason) or complete (transfer reference) a dispute"""
        if action == 'approve':
            try:
                percentage = float(data.get('refund_percentage'))
            except (TypeError, ValueError):
                percentage = -1
            if not 0 < percentage <= 100:
                raise ValidationError({'refund_percentage': ['Refund percentage must be between 1 and 100']})
            payload = {'refund_percentage': percentage}
        elif action == 'reject':
            validate_reason(data.get('reason'), message='Please provide a reason for rejection')
            payload = {'reason': clean_text(data['reason'])}
        elif action == 'complete':
            validate_reason(data.get('transfer_reference'), field='transfer_reference',
                            message='Transfer reference is required')
            payload = {'transfer_reference': clean_text(data['transfer_reference'])}
        else:
            raise ValueError(f'Unknown action: {action}')

        if data.get('notes'):
            payload['notes'] = data['notes']
        return mutate('admin.disputes', dispute_id, f'/admin/disputes/{dispute_id}/{action}',
                      payload=payload, changes={'status': DISPUTE_STATUS[action]})
